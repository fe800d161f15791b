"""
Example 01: Basic Hydration

This example hydrates users together with the role each one references.
"""

import logging
import tempfile
from pathlib import Path

from wildfire import ConnectionConfig, Model, ModelRegistry, Wildfire

models = ModelRegistry()


@models.model()
class User(Model):
    """User model - every column of the users table"""
    table = "users"


@models.model()
class Role(Model):
    """Role model"""
    table = "roles"


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    db_path = Path(tempfile.mkdtemp()) / "app.db"
    config = ConnectionConfig(driver="sqlite", database=str(db_path), pool_size=1)
    wildfire = Wildfire.from_config(config, models)

    engine = wildfire.engine
    engine.execute("CREATE TABLE roles (id INTEGER PRIMARY KEY, title TEXT NOT NULL)")
    engine.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, "
        "role_id INTEGER REFERENCES roles(id))"
    )
    engine.execute("INSERT INTO roles (id, title) VALUES (5, 'Admin'), (6, 'Editor')")
    engine.execute("INSERT INTO users (name, role_id) VALUES ('Ann', 5), ('Bob', 6)")

    print("=== Hydration ===\n")

    print("1. All users:")
    for user in wildfire.get("users").result():
        print(f"   - {user.name} ({user.role.title})")
    print()

    print("2. Single user by primary key:")
    ann = wildfire.find_object("users", 1)
    print(f"   {ann.to_dict()}\n")

    engine.connection_manager.close_pool()
    db_path.unlink()


if __name__ == "__main__":
    main()

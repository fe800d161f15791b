"""
Example 02: Named Queries and Allow-lists

Queries live in .sql files; the first folder names the table whose
models the query returns. Post declares an allow-list of columns.
"""

import tempfile
from pathlib import Path

from wildfire import ConnectionConfig, Model, ModelRegistry, SQLRegistry, Wildfire

models = ModelRegistry()


@models.model()
class User(Model):
    table = "users"


@models.model()
class Post(Model):
    """Only id, title and author_id are hydrated"""
    table = "posts"
    columns = ("id", "title", "author_id")


def main():
    work_dir = Path(tempfile.mkdtemp())
    sql_dir = work_dir / "sql" / "posts"
    sql_dir.mkdir(parents=True)
    (sql_dir / "by_author.sql").write_text(
        "SELECT * FROM posts WHERE author_id = :author_id ORDER BY id"
    )

    config = ConnectionConfig(driver="sqlite", database=str(work_dir / "blog.db"), pool_size=1)
    wildfire = Wildfire.from_config(config, models, SQLRegistry(work_dir / "sql"))

    engine = wildfire.engine
    engine.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
    engine.execute(
        "CREATE TABLE posts (id INTEGER PRIMARY KEY, title TEXT NOT NULL, "
        "body TEXT, author_id INTEGER REFERENCES users(id))"
    )
    engine.execute("INSERT INTO users (id, name) VALUES (1, 'Ann')")
    engine.execute(
        "INSERT INTO posts (title, body, author_id) VALUES "
        "('Hello', 'First post', 1), ('Again', 'Second post', 1)"
    )

    print("=== Named Queries ===\n")
    posts = wildfire.run("posts.by_author", {"author_id": 1}).result()
    for post in posts:
        print(f"   {post.title} by {post.user.name}: {post.to_dict()}")
    print()

    engine.connection_manager.close_pool()


if __name__ == "__main__":
    main()

"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from wildfire.core.connection import ConnectionConfig, ConnectionManager
from wildfire.core.engine import Engine
from wildfire.core.registry import SQLRegistry

SCHEMA = [
    "CREATE TABLE roles (id INTEGER PRIMARY KEY, title TEXT NOT NULL)",
    "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, "
    "role_id INTEGER REFERENCES roles(id))",
    "CREATE TABLE categories (id INTEGER PRIMARY KEY, name TEXT NOT NULL, "
    "parent_id INTEGER REFERENCES categories(id))",
    "CREATE TABLE posts (id INTEGER PRIMARY KEY, title TEXT NOT NULL, "
    "author_id INTEGER REFERENCES users, category_id INTEGER REFERENCES categories(id))",
]


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config with a single shared connection."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def tmp_sql_dir(tmp_path: Path) -> Path:
    """Temporary directory for SQL files."""
    return tmp_path / "sql"


@pytest.fixture
def write_sql(tmp_sql_dir: Path):
    """Helper to write SQL files into the temp directory.

    Usage:
        write_sql("users/active.sql", "SELECT * FROM users WHERE active = 1")
    """

    def _write(relative_path: str, content: str) -> Path:
        file_path = tmp_sql_dir / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def create_schema():
    """Helper creating the test tables on an engine."""

    def _create(eng: Engine) -> None:
        for statement in SCHEMA:
            eng.execute(statement)

    return _create


@pytest.fixture
def engine(
    sqlite_config: ConnectionConfig, tmp_sql_dir: Path, create_schema
) -> Iterator[Engine]:
    """Engine on an in-memory database holding roles, users, categories and posts."""
    manager = ConnectionManager(sqlite_config)
    eng = Engine(manager, SQLRegistry(tmp_sql_dir))
    create_schema(eng)
    yield eng
    manager.close_pool()

"""Unit tests for Engine and QueryResult."""

from __future__ import annotations

from pathlib import Path

import pytest

from wildfire.core.connection import ConnectionConfig, ConnectionManager
from wildfire.core.engine import Engine, QueryResult
from wildfire.core.exceptions import (
    AdapterError,
    MultipleRowsError,
    ParameterBindingError,
    QueryNotFoundError,
)
from wildfire.core.registry import SQLRegistry


@pytest.fixture
def seeded(engine: Engine) -> Engine:
    engine.execute("INSERT INTO roles (id, title) VALUES (1, 'Admin')")
    engine.execute("INSERT INTO roles (id, title) VALUES (2, 'Editor')")
    return engine


class TestEngine:
    def test_query_returns_query_result(self, seeded: Engine) -> None:
        result = seeded.query("SELECT id, title FROM roles ORDER BY id")
        assert isinstance(result, QueryResult)
        assert result.result() == [{"id": 1, "title": "Admin"}, {"id": 2, "title": "Editor"}]

    def test_query_with_params(self, seeded: Engine) -> None:
        result = seeded.query("SELECT title FROM roles WHERE id = :id", {"id": 2})
        assert result.row() == {"title": "Editor"}

    def test_fetch_one(self, seeded: Engine) -> None:
        row = seeded.fetch_one("SELECT * FROM roles WHERE id = :id", {"id": 1})
        assert row == {"id": 1, "title": "Admin"}

    def test_fetch_one_returns_none(self, seeded: Engine) -> None:
        assert seeded.fetch_one("SELECT * FROM roles WHERE id = :id", {"id": 9}) is None

    def test_fetch_one_raises_multiple_rows(self, seeded: Engine) -> None:
        with pytest.raises(MultipleRowsError):
            seeded.fetch_one("SELECT * FROM roles")

    def test_execute_returns_row_count(self, seeded: Engine) -> None:
        assert seeded.execute("UPDATE roles SET title = 'x'") == 2

    def test_driver_errors_are_wrapped(self, seeded: Engine) -> None:
        with pytest.raises(ParameterBindingError, match="no such table"):
            seeded.query("SELECT * FROM invoices")

    def test_named_query(self, sqlite_config: ConnectionConfig, tmp_sql_dir: Path, write_sql):
        write_sql("roles/by_id.sql", "SELECT 'Admin' AS title WHERE :id = 1")
        engine = Engine(ConnectionManager(sqlite_config), SQLRegistry(tmp_sql_dir))
        assert engine.query("roles.by_id", {"id": 1}).result() == [{"title": "Admin"}]

    def test_named_query_not_found(self, engine: Engine) -> None:
        with pytest.raises(QueryNotFoundError):
            engine.query("roles.nope")

    def test_from_config(self, sqlite_config: ConnectionConfig) -> None:
        engine = Engine.from_config(sqlite_config)
        assert engine.registry is None
        assert engine.query("SELECT 1 AS one").result() == [{"one": 1}]

    def test_unsupported_driver(self) -> None:
        with pytest.raises(AdapterError, match="Unsupported"):
            Engine.from_config(ConnectionConfig(driver="db2", database="x"))


class TestQueryResult:
    def test_accessors(self) -> None:
        result = QueryResult([{"id": 1}, {"id": 2}], "roles.all")
        assert result.num_rows() == 2
        assert len(result) == 2
        assert list(result) == [{"id": 1}, {"id": 2}]
        assert result.row(1) == {"id": 2}
        assert result.row(5) is None
        assert repr(result) == "QueryResult('roles.all', rows=2)"

    def test_result_returns_a_copy(self) -> None:
        result = QueryResult([{"id": 1}])
        result.result().clear()
        assert result.num_rows() == 1

    def test_empty(self) -> None:
        assert QueryResult([]).row() is None

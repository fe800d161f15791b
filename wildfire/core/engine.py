"""Query execution engine.

The Engine resolves named or inline queries, binds parameters, executes
them through the adapter and hands back materialised results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from wildfire.core.connection import ConnectionConfig, ConnectionManager
from wildfire.core.exceptions import MultipleRowsError, ParameterBindingError
from wildfire.core.params import normalize_params, resolve_sql
from wildfire.core.registry import SQLRegistry

logger = logging.getLogger(__name__)


def _rows_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Convert cursor results to a list of dicts.

    Handles both tuple-like rows and dict-like rows from different adapters.
    """
    if cursor.description is None:
        return []
    columns = [desc[0] for desc in cursor.description]
    rows = cursor.fetchall()
    if not rows:
        return []

    # psycopg dict_row and MySQL dictionary cursors already yield dicts
    if isinstance(rows[0], dict):
        return [dict(row) for row in rows]

    return [dict(zip(columns, row, strict=True)) for row in rows]


class QueryResult:
    """Materialised rows of one query.

    Exposes ``result()`` so it can be handed straight to a ResultMapper.
    """

    def __init__(self, rows: list[dict[str, Any]], label: str = "<inline>") -> None:
        self._rows = rows
        self.label = label

    def result(self) -> list[dict[str, Any]]:
        """All rows, in query order."""
        return list(self._rows)

    def row(self, index: int = 0) -> dict[str, Any] | None:
        """The row at *index*, or None when there is no such row."""
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def num_rows(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"QueryResult({self.label!r}, rows={len(self._rows)})"


class Engine:
    """Synchronous query execution engine.

    Args:
        connection_manager: Supplies pooled connections and the adapter.
        registry: Optional SQLRegistry for named queries. Without one every
            query string is treated as inline SQL.
    """

    def __init__(
        self,
        connection_manager: ConnectionManager,
        registry: SQLRegistry | None = None,
    ) -> None:
        self._connection_manager = connection_manager
        self._registry = registry
        self._paramstyle = connection_manager.adapter.paramstyle

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        registry: SQLRegistry | None = None,
    ) -> Engine:
        """Create an Engine from a ConnectionConfig and optional SQLRegistry."""
        return cls(ConnectionManager(config), registry)

    @property
    def connection_manager(self) -> ConnectionManager:
        return self._connection_manager

    @property
    def registry(self) -> SQLRegistry | None:
        return self._registry

    def _run(
        self,
        query: str,
        params: dict[str, Any] | None,
        *,
        commit: bool = False,
    ) -> tuple[list[dict[str, Any]], int, str]:
        sql, label = resolve_sql(query, self._registry)
        sql = normalize_params(sql, self._paramstyle)
        logger.debug("Executing %s: %s params=%r", label, sql, params)

        with self._connection_manager.get_connection() as conn:
            try:
                cursor = self._connection_manager.adapter.execute(conn, sql, params)
            except Exception as e:
                raise ParameterBindingError(label, str(e)) from e

            rows = _rows_to_dicts(cursor)
            if commit:
                conn.commit()
            return rows, int(cursor.rowcount), label

    def query(self, query: str, params: dict[str, Any] | None = None) -> QueryResult:
        """Run a named or inline query and return all of its rows."""
        rows, _, label = self._run(query, params)
        return QueryResult(rows, label)

    def fetch_one(self, query: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Fetch a single row.

        Returns None if zero rows match.
        Raises MultipleRowsError if more than one row matches.
        """
        rows, _, label = self._run(query, params)
        if not rows:
            return None
        if len(rows) > 1:
            raise MultipleRowsError(label, len(rows))
        return rows[0]

    def execute(self, query: str, params: dict[str, Any] | None = None) -> int:
        """Execute a write query. Returns affected row count."""
        _, rowcount, _ = self._run(query, params, commit=True)
        return rowcount

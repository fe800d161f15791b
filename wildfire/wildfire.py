"""Wildfire - hydrate query results into models with their relations.

Wildfire joins ObjectBuilder and ResultMapper and implements their
collaborators on top of an Engine:

    wildfire = Wildfire(engine, models)
    users = wildfire.get("users").result()
    users[0].role.title
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from wildfire.core.config import HydrationConfig
from wildfire.core.connection import ConnectionConfig
from wildfire.core.engine import Engine
from wildfire.core.exceptions import WildfireError
from wildfire.core.params import check_identifier, is_raw_sql
from wildfire.core.registry import SQLRegistry
from wildfire.describe.describe import Describe
from wildfire.mapping.object import ObjectBuilder
from wildfire.mapping.result import ResultMapper
from wildfire.model.naming import table_key
from wildfire.model.registry import ModelRegistry

logger = logging.getLogger(__name__)


class Wildfire(ObjectBuilder, ResultMapper):
    """Query facade returning hydrated models.

    Args:
        engine: Engine the lookups and table queries run on.
        registry: ModelRegistry with a model for every table hydrated.
        describe: Introspection service; defaults to Describe(engine).
        query: An existing result (anything with ``result()``) or row list.
        table: Table the rows of *query* belong to.
        default_table: Table used by ``get()`` when called without one.
        config: Hydration limits.
    """

    def __init__(
        self,
        engine: Engine,
        registry: ModelRegistry,
        describe: Any | None = None,
        query: Any = None,
        *,
        table: str | None = None,
        default_table: str | None = None,
        config: HydrationConfig | None = None,
    ) -> None:
        super().__init__(describe or Describe(engine), registry, config)
        self.engine = engine
        self.query = query
        self.table = table or ""
        self.default_table = default_table

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        registry: ModelRegistry,
        sql_registry: SQLRegistry | None = None,
        **kwargs: Any,
    ) -> Wildfire:
        """Create a Wildfire with its own Engine from a ConnectionConfig."""
        return cls(Engine.from_config(config, sql_registry), registry, **kwargs)

    def get_table_name(self, table: str) -> str:
        return table_key(table)

    def find(self, table: str, delimiters: Any = None) -> dict[str, Any] | None:
        """Return the first row of *table* matching *delimiters*, or None.

        *delimiters* maps column names to values; a scalar is matched
        against the table's primary key.
        """
        check_identifier(table)
        if delimiters is None:
            delimiters = {}
        elif not isinstance(delimiters, Mapping):
            delimiters = {self._primary_key(table) or "id": delimiters}

        clauses: list[str] = []
        params: dict[str, Any] = {}
        for column, value in delimiters.items():
            check_identifier(column)
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = :{column}")
                params[column] = value

        sql = f"SELECT * FROM {table}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " LIMIT 1"

        return self.engine.query(sql, params).row()

    def find_object(self, table: str, delimiters: Any = None) -> Any:
        """Like ``find`` but returns the hydrated model (or None)."""
        row = self.find(table, delimiters)
        if row is None:
            return None
        return self.create_object(table, row)

    def get(self, table: str | None = None) -> Wildfire:
        """Select every row of *table* and remember it for ``result()``.

        Without *table*, ``default_table`` is remembered instead; it is
        only queried when no query is held yet.

        Raises:
            WildfireError: If neither a table nor a default table is known.
        """
        if table:
            check_identifier(table)
            self.table = table
            self.query = self.engine.query(f"SELECT * FROM {table}")
            return self

        if not self.default_table:
            raise WildfireError("get() needs a table name when no default_table is configured")

        self.table = self.default_table
        if self.query is None:
            check_identifier(self.table)
            self.query = self.engine.query(f"SELECT * FROM {self.table}")
        return self

    def run(
        self,
        query: str,
        params: dict[str, Any] | None = None,
        table: str | None = None,
    ) -> Wildfire:
        """Run a named or inline query and remember its rows for ``result()``.

        Named queries default *table* to their first namespace segment
        ("users.active" -> "users").
        """
        if table is None and not is_raw_sql(query):
            table = SQLRegistry.table_for(query)
        self.query = self.engine.query(query, params)
        if table:
            self.table = table
        return self

    def set_query(self, query: Any, table: str | None = None) -> Wildfire:
        """Wrap an existing result or row list."""
        self.query = query
        if table:
            self.table = table
        return self

"""Schema introspection service."""

from __future__ import annotations

import logging

from wildfire.core.engine import Engine
from wildfire.core.enums import DatabaseBackend
from wildfire.core.exceptions import AdapterError, TableNotFoundError
from wildfire.describe.backends import (
    Describer,
    MysqlDescriber,
    PostgresqlDescriber,
    SqliteDescriber,
)
from wildfire.describe.column import Column, primary_key

logger = logging.getLogger(__name__)

_DESCRIBERS: dict[DatabaseBackend, type[Describer]] = {
    DatabaseBackend.SQLITE: SqliteDescriber,
    DatabaseBackend.POSTGRESQL: PostgresqlDescriber,
    DatabaseBackend.MYSQL: MysqlDescriber,
}


class Describe:
    """Reports table columns and their foreign-key linkage.

    Results are not cached here; ObjectBuilder keeps its own per-instance
    cache of table metadata.

    Args:
        engine: Engine whose connection the catalog queries run on.
        describer: Override the backend describer picked from the driver.
    """

    def __init__(self, engine: Engine, describer: Describer | None = None) -> None:
        self._engine = engine
        if describer is None:
            backend = engine.connection_manager.backend
            try:
                describer = _DESCRIBERS[backend]()
            except KeyError:
                raise AdapterError(f"No describer for backend '{backend.value}'") from None
        self._describer = describer

    def get_table(self, table: str) -> list[Column]:
        """Columns of *table* in ordinal order.

        Raises:
            TableNotFoundError: If the table has no columns (does not exist).
        """
        columns = self._describer.describe(self._engine, table)
        if not columns:
            raise TableNotFoundError(table)
        logger.debug(
            "Described %s: %s",
            table,
            ", ".join(c.field + ("*" if c.is_foreign_key else "") for c in columns),
        )
        return columns

    def get_primary_key(self, table: str) -> str | None:
        """Name of the first primary-key column of *table*, if any."""
        return primary_key(self.get_table(table))

    def get_table_names(self) -> list[str]:
        return self._describer.table_names(self._engine)

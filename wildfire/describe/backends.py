"""Per-backend schema introspection queries.

Each describer turns the backend's catalog into an ordered list of Column
descriptors. Queries run through the Engine, so they share its connection
pool and parameter handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from wildfire.core.params import check_identifier
from wildfire.describe.column import Column

if TYPE_CHECKING:
    from wildfire.core.engine import Engine


class Describer(Protocol):
    """Backend-specific column introspection."""

    def describe(self, engine: Engine, table: str) -> list[Column]:
        """Return the columns of *table* in ordinal order (empty if unknown)."""
        ...

    def table_names(self, engine: Engine) -> list[str]:
        """Return the names of all user tables."""
        ...


class SqliteDescriber:
    """Reads ``PRAGMA table_info`` and ``PRAGMA foreign_key_list``."""

    def describe(self, engine: Engine, table: str) -> list[Column]:
        check_identifier(table)
        info = engine.query(f'PRAGMA table_info("{table}")').result()
        if not info:
            return []

        foreign: dict[str, tuple[str, str]] = {}
        for fk in engine.query(f'PRAGMA foreign_key_list("{table}")'):
            referenced_field = fk["to"] or self._primary_key(engine, fk["table"])
            foreign[fk["from"]] = (fk["table"], referenced_field)

        columns = []
        for row in info:
            name = row["name"]
            referenced = foreign.get(name)
            columns.append(
                Column(
                    field=name,
                    data_type=(row["type"] or "").lower(),
                    is_nullable=not row["notnull"] and not row["pk"],
                    is_primary_key=bool(row["pk"]),
                    is_foreign_key=referenced is not None,
                    referenced_table=referenced[0] if referenced else None,
                    referenced_field=referenced[1] if referenced else None,
                    default=row["dflt_value"],
                )
            )
        return columns

    def table_names(self, engine: Engine) -> list[str]:
        rows = engine.query(
            "SELECT name FROM sqlite_master WHERE type = 'table' "
            "AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row["name"] for row in rows]

    def _primary_key(self, engine: Engine, table: str) -> str:
        # A REFERENCES clause without a column points at the primary key
        check_identifier(table)
        for row in engine.query(f'PRAGMA table_info("{table}")'):
            if row["pk"]:
                return str(row["name"])
        return "id"


_POSTGRES_COLUMNS = """
SELECT column_name AS field, data_type, is_nullable, column_default
FROM information_schema.columns
WHERE table_schema = current_schema() AND table_name = :table
ORDER BY ordinal_position
"""

_POSTGRES_KEYS = """
SELECT kcu.column_name AS field,
       tc.constraint_type AS constraint_type,
       ccu.table_name AS referenced_table,
       ccu.column_name AS referenced_field
FROM information_schema.table_constraints tc
JOIN information_schema.key_column_usage kcu
  ON kcu.constraint_name = tc.constraint_name
 AND kcu.table_schema = tc.table_schema
LEFT JOIN information_schema.constraint_column_usage ccu
  ON tc.constraint_type = 'FOREIGN KEY'
 AND ccu.constraint_name = tc.constraint_name
 AND ccu.constraint_schema = tc.table_schema
WHERE tc.table_schema = current_schema()
  AND tc.table_name = :table
  AND tc.constraint_type IN ('PRIMARY KEY', 'FOREIGN KEY')
"""


class PostgresqlDescriber:
    """Reads ``information_schema`` in the current schema."""

    def describe(self, engine: Engine, table: str) -> list[Column]:
        check_identifier(table)
        info = engine.query(_POSTGRES_COLUMNS, {"table": table}).result()
        if not info:
            return []

        primary: set[str] = set()
        foreign: dict[str, tuple[str, str]] = {}
        for row in engine.query(_POSTGRES_KEYS, {"table": table}):
            if row["constraint_type"] == "PRIMARY KEY":
                primary.add(row["field"])
            elif row["referenced_table"]:
                foreign[row["field"]] = (row["referenced_table"], row["referenced_field"])

        return [_information_schema_column(row, primary, foreign) for row in info]

    def table_names(self, engine: Engine) -> list[str]:
        rows = engine.query(
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = current_schema() AND table_type = 'BASE TABLE' "
            "ORDER BY table_name"
        )
        return [row["table_name"] for row in rows]


_MYSQL_COLUMNS = """
SELECT COLUMN_NAME AS field, DATA_TYPE AS data_type, IS_NULLABLE AS is_nullable,
       COLUMN_DEFAULT AS column_default, COLUMN_KEY AS column_key
FROM information_schema.COLUMNS
WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = :table
ORDER BY ORDINAL_POSITION
"""

_MYSQL_FOREIGN_KEYS = """
SELECT COLUMN_NAME AS field, REFERENCED_TABLE_NAME AS referenced_table,
       REFERENCED_COLUMN_NAME AS referenced_field
FROM information_schema.KEY_COLUMN_USAGE
WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = :table
  AND REFERENCED_TABLE_NAME IS NOT NULL
"""


class MysqlDescriber:
    """Reads ``information_schema`` in the connected database."""

    def describe(self, engine: Engine, table: str) -> list[Column]:
        check_identifier(table)
        info = engine.query(_MYSQL_COLUMNS, {"table": table}).result()
        if not info:
            return []

        primary = {row["field"] for row in info if row["column_key"] == "PRI"}
        foreign = {
            row["field"]: (row["referenced_table"], row["referenced_field"])
            for row in engine.query(_MYSQL_FOREIGN_KEYS, {"table": table})
        }
        return [_information_schema_column(row, primary, foreign) for row in info]

    def table_names(self, engine: Engine) -> list[str]:
        rows = engine.query(
            "SELECT TABLE_NAME AS table_name FROM information_schema.TABLES "
            "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_TYPE = 'BASE TABLE' "
            "ORDER BY TABLE_NAME"
        )
        return [row["table_name"] for row in rows]


def _information_schema_column(
    row: dict[str, Any],
    primary: set[str],
    foreign: dict[str, tuple[str, str]],
) -> Column:
    name = row["field"]
    referenced = foreign.get(name)
    return Column(
        field=name,
        data_type=str(row["data_type"]).lower(),
        is_nullable=row["is_nullable"] == "YES",
        is_primary_key=name in primary,
        is_foreign_key=referenced is not None,
        referenced_table=referenced[0] if referenced else None,
        referenced_field=referenced[1] if referenced else None,
        default=row["column_default"],
    )

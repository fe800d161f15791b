"""Schema introspection - table columns and foreign-key linkage."""

from __future__ import annotations

from wildfire.describe.backends import (
    Describer,
    MysqlDescriber,
    PostgresqlDescriber,
    SqliteDescriber,
)
from wildfire.describe.column import Column, primary_key
from wildfire.describe.describe import Describe

__all__ = [
    "Column",
    "primary_key",
    "Describe",
    "Describer",
    "SqliteDescriber",
    "PostgresqlDescriber",
    "MysqlDescriber",
]

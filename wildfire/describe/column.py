"""Column descriptor returned by schema introspection."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Column:
    """Metadata for one table column, including foreign-key linkage.

    ``referenced_table`` and ``referenced_field`` are set only when
    ``is_foreign_key`` is true.
    """

    field: str
    data_type: str = ""
    is_nullable: bool = True
    is_primary_key: bool = False
    is_foreign_key: bool = False
    referenced_table: str | None = None
    referenced_field: str | None = None
    default: Any = None

    def __post_init__(self) -> None:
        if self.is_foreign_key and not (self.referenced_table and self.referenced_field):
            raise ValueError(
                f"Foreign-key column '{self.field}' needs a referenced table and field"
            )


def primary_key(columns: Iterable[Column]) -> str | None:
    """Name of the first primary-key column in *columns*, if any."""
    for column in columns:
        if column.is_primary_key:
            return column.field
    return None

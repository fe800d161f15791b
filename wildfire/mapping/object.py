"""Object builder - hydrates one row into its model, foreign keys included.

For every column the table describes, the builder copies the row's value
onto a fresh model. Foreign-key columns are then resolved by looking up
the referenced row with ``find`` and hydrating it recursively under a
property named after the referenced table ("role_id" -> "role").
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from wildfire.core.config import HydrationConfig
from wildfire.core.exceptions import ColumnMismatchError, HydrationDepthError
from wildfire.describe.column import Column, primary_key

logger = logging.getLogger(__name__)

_Step = tuple[str, tuple[tuple[str, Any], ...]]


def _read_field(row: Any, key: str, table: str) -> Any:
    """Read column *key* from a mapping-like or attribute-style row."""
    try:
        if isinstance(row, Mapping) or hasattr(row, "keys"):
            return row[key]
        return getattr(row, key)
    except (KeyError, IndexError, AttributeError):
        raise ColumnMismatchError(table, [key]) from None


class ObjectBuilder:
    """Creates hydrated models from rows.

    Subclasses supply the row lookup (``find``) and the table-name
    derivation (``get_table_name``). Table metadata is cached per instance
    and never invalidated.

    Args:
        describe: Introspection service exposing ``get_table(name)``.
        registry: ModelRegistry resolving table names to models.
        config: Hydration limits; defaults to HydrationConfig().
    """

    def __init__(
        self,
        describe: Any,
        registry: Any,
        config: HydrationConfig | None = None,
    ) -> None:
        self.describe = describe
        self.registry = registry
        self.hydration = config or HydrationConfig()
        self._tables: dict[str, list[Column]] = {}
        self._path: set[_Step] = set()
        self._depth = 0

    def find(self, table: str, delimiters: Any = None) -> Any:
        """Return the row of *table* matching *delimiters*, or a falsy value."""
        raise NotImplementedError

    def get_table_name(self, table: str) -> str:
        """Derive the model (and nested property) name for *table*."""
        raise NotImplementedError

    def create_object(self, table: str, row: Any) -> Any:
        """Create a model for *table* from *row*.

        Raises:
            ModelNotFoundError: No model is registered for the table.
            ColumnMismatchError: The row lacks a column being hydrated.
            HydrationDepthError: The foreign-key chain is too deep.
        """
        model, new_table = self._get_model(table)
        table_info = self._get_table_info(new_table)

        allowed = getattr(model, "columns", None) or ()
        columns = [c for c in table_info if not allowed or c.field in allowed]

        values = {c.field: _read_field(row, c.field, new_table) for c in columns}
        for field, value in values.items():
            setattr(model, field, value)

        identity = {
            (new_table, ((c.field, values[c.field]),)) for c in columns if c.is_primary_key
        }
        entered = identity - self._path
        self._path |= entered
        try:
            for column in columns:
                self._set_foreign_field(model, column, values[column.field])
        finally:
            self._path -= entered

        return model

    def _set_foreign_field(self, model: Any, column: Column, value: Any) -> None:
        """Attach the referenced object of a foreign-key column, if any."""
        if not column.is_foreign_key or not self.hydration.follow_foreign_keys:
            return

        key = column.field
        foreign_table = str(column.referenced_table)
        foreign_column = str(column.referenced_field)
        new_column = self.get_table_name(foreign_table)

        delimiters = {foreign_column: value}
        step: _Step = (foreign_table.lower(), tuple(delimiters.items()))

        if step in self._path:
            logger.warning(
                "Not following %s.%s -> %s%r: row is already being hydrated",
                type(model).__name__,
                key,
                foreign_table,
                delimiters,
            )
            setattr(model, new_column, None)
            return

        logger.debug("Resolving %s -> %s%r", key, foreign_table, delimiters)
        foreign_data = self.find(foreign_table, delimiters)

        if foreign_data:
            if self._depth >= self.hydration.max_depth:
                raise HydrationDepthError(foreign_table, self.hydration.max_depth)
            self._path.add(step)
            self._depth += 1
            try:
                foreign_data = self.create_object(foreign_table, foreign_data)
            finally:
                self._depth -= 1
                self._path.discard(step)

        setattr(model, new_column, foreign_data)

    def _get_model(self, table: str | None) -> tuple[Any, str]:
        """Instantiate the model for *table* and return it with its table name.

        The model's own ``table`` attribute, when set, wins over *table*.
        The returned name is lower-cased.
        """
        if not table:
            return None, ""

        model = self.registry.resolve(self.get_table_name(table))
        new_table = getattr(model, "table", None) or table
        return model, new_table.lower()

    def _get_table_info(self, table: str) -> list[Column]:
        """Columns of *table*, described once and cached."""
        key = table.lower()
        if key not in self._tables:
            logger.debug("Loading column metadata for %s", key)
            self._tables[key] = list(self.describe.get_table(key))
        return self._tables[key]

    def _primary_key(self, table: str) -> str | None:
        """First primary-key column of *table*, read from cached metadata."""
        return primary_key(self._get_table_info(table))

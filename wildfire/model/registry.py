"""Model registry - explicit table-to-model mapping.

Models are registered once at startup and resolved by table name. Keys
are normalised with ``table_key``, so "users", "Users" and "user" all
resolve to the same entry.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from wildfire.core.exceptions import DuplicateModelError, ModelDefinitionError, ModelNotFoundError
from wildfire.model.naming import table_key

M = TypeVar("M", bound=type)


class ModelRegistry:
    """Maps table names to model factories."""

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], Any]] = {}

    def register(self, table: str, factory: Callable[[], Any]) -> None:
        """Register *factory* (usually a model class) for *table*.

        Raises:
            DuplicateModelError: If the table already has a model.
        """
        key = table_key(table)
        if key in self._factories:
            raise DuplicateModelError(key)
        self._factories[key] = factory

    def model(self, table: str | None = None) -> Callable[[M], M]:
        """Class decorator form of :meth:`register`.

        Without *table* the class's own ``table`` attribute is used.
        """

        def decorator(cls: M) -> M:
            name = table or getattr(cls, "table", None)
            if not name:
                raise ModelDefinitionError(
                    f"{cls.__name__} declares no table; pass one to registry.model()"
                )
            self.register(name, cls)
            return cls

        return decorator

    def resolve(self, table: str) -> Any:
        """Instantiate a fresh model for *table*.

        Raises:
            ModelNotFoundError: If no model is registered for the table.
        """
        try:
            factory = self._factories[table_key(table)]
        except KeyError:
            raise ModelNotFoundError(table) from None
        return factory()

    def has(self, table: str) -> bool:
        return table_key(table) in self._factories

    @property
    def tables(self) -> list[str]:
        """Registered table keys, sorted alphabetically."""
        return sorted(self._factories)

    def __contains__(self, table: object) -> bool:
        return isinstance(table, str) and self.has(table)

    def __len__(self) -> int:
        return len(self._factories)

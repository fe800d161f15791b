"""Model base class - the in-memory record a row is hydrated into."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, ClassVar

from wildfire.core.exceptions import ModelDefinitionError
from wildfire.core.params import is_identifier


def _validate_columns(cls_name: str, columns: Any) -> tuple[str, ...] | None:
    if columns is None:
        return None
    if isinstance(columns, str) or not isinstance(columns, Sequence):
        raise ModelDefinitionError(f"{cls_name}.columns must be a sequence of column names")

    names = tuple(columns)
    for name in names:
        if not isinstance(name, str) or not name:
            raise ModelDefinitionError(f"{cls_name}.columns contains an invalid name: {name!r}")
    if len(set(names)) != len(names):
        raise ModelDefinitionError(f"{cls_name}.columns contains duplicate names")
    return names


class Model:
    """Mutable record keyed by column name.

    Subclasses may declare:

    * ``table`` - the table the model is stored in, overriding the name the
      model was registered under;
    * ``columns`` - an allow-list; hydration copies only these columns.

    Both are validated when the subclass is defined. Values are readable as
    attributes or items and keep insertion (column) order.
    """

    table: ClassVar[str | None] = None
    columns: ClassVar[tuple[str, ...] | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.table is not None and not is_identifier(cls.table):
            raise ModelDefinitionError(f"{cls.__name__}.table is not a valid table name")
        cls.columns = _validate_columns(cls.__name__, cls.__dict__.get("columns", cls.columns))

    def __init__(self, **values: Any) -> None:
        object.__setattr__(self, "_data", {})
        for key, value in values.items():
            self._data[key] = value

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        data = self.__dict__.get("_data", {})
        try:
            return data[name]
        except KeyError:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._data[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._data[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def keys(self) -> list[str]:
        return list(self._data)

    def get(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict of the model's values, nested models included."""
        return {
            key: value.to_dict() if isinstance(value, Model) else value
            for key, value in self._data.items()
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._data.items())
        return f"{type(self).__name__}({fields})"

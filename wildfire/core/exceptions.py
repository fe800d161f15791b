"""Wildfire exception hierarchy.

All exceptions are Wildfire-specific. Raw driver exceptions are wrapped
once at the engine boundary and never reach callers directly.
"""

from __future__ import annotations


class WildfireError(Exception):
    """Base exception for all Wildfire errors."""


# --- Registry ---


class RegistryError(WildfireError):
    """Base for query and model registry errors."""


class QueryNotFoundError(RegistryError):
    """Raised when a named query cannot be found in the registry."""

    def __init__(self, query_name: str) -> None:
        self.query_name = query_name
        super().__init__(f"Query not found: '{query_name}'")


class DuplicateQueryError(RegistryError):
    """Raised when two SQL files resolve to the same namespace key."""

    def __init__(self, query_name: str, path_a: str, path_b: str) -> None:
        self.query_name = query_name
        super().__init__(f"Duplicate query name '{query_name}': {path_a} and {path_b}")


class ModelNotFoundError(RegistryError):
    """Raised when no model is registered for a table."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"No model registered for table '{table}'")


class DuplicateModelError(RegistryError):
    """Raised when two models are registered under the same table key."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"A model is already registered for table '{table}'")


# --- Execution ---


class ExecutionError(WildfireError):
    """Base for query execution errors."""


class MultipleRowsError(ExecutionError):
    """Raised when fetch_one encounters more than one row."""

    def __init__(self, query_name: str, row_count: int) -> None:
        self.query_name = query_name
        self.row_count = row_count
        super().__init__(
            f"fetch_one for '{query_name}' returned {row_count} rows (expected 0 or 1)"
        )


class ParameterBindingError(ExecutionError):
    """Raised when the driver rejects a statement or its parameters."""

    def __init__(self, query_name: str, detail: str) -> None:
        self.query_name = query_name
        super().__init__(f"Parameter binding error for '{query_name}': {detail}")


class SQLSanitizationError(ExecutionError):
    """Raised when a table or column identifier is not safe to interpolate."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"SQL sanitization failed: {detail}")


# --- Mapping ---


class MappingError(WildfireError):
    """Base for hydration errors."""


class ColumnMismatchError(MappingError):
    """Raised when a row lacks a column the model hydrates."""

    def __init__(self, table: str, missing_fields: list[str]) -> None:
        self.table = table
        self.missing_fields = missing_fields
        super().__init__(f"Cannot hydrate '{table}': row is missing fields {missing_fields}")


class ModelDefinitionError(MappingError):
    """Raised when a Model subclass declares an invalid table or allow-list."""


class HydrationDepthError(MappingError):
    """Raised when a foreign-key chain is deeper than the configured bound."""

    def __init__(self, table: str, max_depth: int) -> None:
        self.table = table
        self.max_depth = max_depth
        super().__init__(
            f"Foreign-key chain exceeded max_depth={max_depth} while hydrating '{table}'"
        )


# --- Introspection ---


class DescribeError(WildfireError):
    """Base for schema introspection errors."""


class TableNotFoundError(DescribeError):
    """Raised when introspection finds no columns for a table."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"Table not found: '{table}'")


# --- Adapter ---


class AdapterError(WildfireError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""

"""Wildfire - hydrate database rows into models, foreign keys included."""

from __future__ import annotations

from wildfire.core.config import HydrationConfig
from wildfire.core.connection import ConnectionConfig, ConnectionManager
from wildfire.core.engine import Engine, QueryResult
from wildfire.core.enums import DatabaseBackend
from wildfire.core.exceptions import (
    AdapterError,
    ColumnMismatchError,
    ConnectionError,  # noqa: A004
    DescribeError,
    DuplicateModelError,
    DuplicateQueryError,
    ExecutionError,
    HydrationDepthError,
    MappingError,
    ModelDefinitionError,
    ModelNotFoundError,
    MultipleRowsError,
    ParameterBindingError,
    QueryNotFoundError,
    RegistryError,
    SQLSanitizationError,
    TableNotFoundError,
    WildfireError,
)
from wildfire.core.registry import SQLRegistry
from wildfire.describe import Column, Describe
from wildfire.mapping import ObjectBuilder, ResultMapper
from wildfire.model import Model, ModelRegistry
from wildfire.wildfire import Wildfire

__all__ = [
    # Facade
    "Wildfire",
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "HydrationConfig",
    # Engine
    "Engine",
    "QueryResult",
    "SQLRegistry",
    # Introspection
    "Describe",
    "Column",
    # Models and mapping
    "Model",
    "ModelRegistry",
    "ObjectBuilder",
    "ResultMapper",
    # Enums
    "DatabaseBackend",
    # Exceptions
    "WildfireError",
    "RegistryError",
    "QueryNotFoundError",
    "DuplicateQueryError",
    "ModelNotFoundError",
    "DuplicateModelError",
    "ExecutionError",
    "MultipleRowsError",
    "ParameterBindingError",
    "SQLSanitizationError",
    "MappingError",
    "ColumnMismatchError",
    "ModelDefinitionError",
    "HydrationDepthError",
    "DescribeError",
    "TableNotFoundError",
    "AdapterError",
    "ConnectionError",
]

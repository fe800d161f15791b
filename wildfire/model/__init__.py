"""Models and the table-to-model registry."""

from __future__ import annotations

from wildfire.model.base import Model
from wildfire.model.naming import singularize, table_key
from wildfire.model.registry import ModelRegistry

__all__ = [
    "Model",
    "ModelRegistry",
    "singularize",
    "table_key",
]

"""Mapping layer - hydrate rows into models."""

from __future__ import annotations

from wildfire.mapping.object import ObjectBuilder
from wildfire.mapping.result import ResultMapper

__all__ = [
    "ObjectBuilder",
    "ResultMapper",
]

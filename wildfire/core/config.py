"""Hydration settings."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HydrationConfig(BaseModel):
    """Controls how far ObjectBuilder follows foreign keys.

    Attributes:
        max_depth: Longest foreign-key chain hydrated from one root row.
            Cycles are cut separately, so this bound is hit only by
            acyclic chains, e.g. a deep self-referencing tree. Exceeding
            it raises HydrationDepthError and fails the whole
            ``result()``; raise it for data with deeper chains.
        follow_foreign_keys: When False, foreign-key columns are copied but
            their referenced rows are not looked up.
    """

    max_depth: int = Field(default=16, ge=1)
    follow_foreign_keys: bool = True

"""Database backend enumeration."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"

    @classmethod
    def from_driver(cls, driver: str) -> DatabaseBackend:
        """Look up a backend by its (case-insensitive) driver name."""
        return cls(driver.lower())

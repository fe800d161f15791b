"""SQL parameter normalization and identifier checks.

Converts `:name` parameter syntax to driver-specific format, handling
string literal exclusion and PostgreSQL `::typecast` syntax, and validates
the table and column names Wildfire interpolates into generated SQL.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

from wildfire.core.exceptions import SQLSanitizationError

if TYPE_CHECKING:
    from wildfire.core.registry import SQLRegistry

# Matches :name but not ::typecast and not inside words
_PARAM_PATTERN = re.compile(r"(?<![:\w]):([a-zA-Z_]\w*)")

# Matches single-quoted string literals (with escaped quotes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'")

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def normalize_params(sql: str, paramstyle: str) -> str:
    """Convert :name parameters to the target param style.

    Args:
        sql: SQL string with :name parameters.
        paramstyle: Target style - 'named' (no conversion) or 'pyformat' (%(name)s).

    Returns:
        SQL with parameters converted to the target style.
    """
    if paramstyle == "named":
        return sql
    return _convert_to_pyformat(sql)


@lru_cache(maxsize=256)
def _convert_to_pyformat(sql: str) -> str:
    """Convert :name params to %(name)s, preserving string literals."""
    parts: list[str] = []
    last_end = 0

    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append(_PARAM_PATTERN.sub(r"%(\1)s", sql[last_end:start]))
        parts.append(match.group())
        last_end = end

    if last_end < len(sql):
        parts.append(_PARAM_PATTERN.sub(r"%(\1)s", sql[last_end:]))

    return "".join(parts)


def is_raw_sql(query: str) -> bool:
    """Return True if query is an inline SQL string rather than a registry key.

    Registry keys use dot-notation (e.g. ``user.get_by_id``) and never
    contain whitespace.  Any SQL statement will contain at least one space.
    """
    return any(c.isspace() for c in query)


def resolve_sql(query: str, registry: SQLRegistry | None) -> tuple[str, str]:
    """Return ``(sql_text, label)`` for *query*.

    Inline SQL is returned unchanged with the label ``"<inline>"``; anything
    else is looked up in *registry* by name.
    """
    if is_raw_sql(query) or registry is None:
        return query, "<inline>"
    return registry.get(query), query


def is_identifier(name: object) -> bool:
    """True if *name* is a plain SQL identifier (letters, digits, underscore)."""
    return isinstance(name, str) and _IDENTIFIER_PATTERN.match(name) is not None


def check_identifier(name: str) -> str:
    """Return *name* if it is a plain SQL identifier, else raise."""
    if not is_identifier(name):
        raise SQLSanitizationError(f"invalid identifier {name!r}")
    return name

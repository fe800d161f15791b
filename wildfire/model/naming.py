"""Table-name derivation.

Tables are plural by convention ("users"), models and nested properties
are named after the singular ("user"). Derivation is lower-case and
idempotent: ``table_key(table_key(x)) == table_key(x)``.
"""

from __future__ import annotations

_IRREGULAR = {
    "people": "person",
    "children": "child",
    "men": "man",
    "women": "woman",
    "mice": "mouse",
    "geese": "goose",
    "feet": "foot",
    "teeth": "tooth",
    "data": "datum",
    "analyses": "analysis",
    "movies": "movie",
    "cookies": "cookie",
    "caches": "cache",
}

# Words that end in "s" but are already singular; their plural adds "es"
_SINGULAR_S = {
    "news",
    "series",
    "species",
    "status",
    "alias",
    "analysis",
    "bus",
    "campus",
    "virus",
    "gas",
}


def singularize(word: str) -> str:
    """Return the singular form of an English table name."""
    lower = word.lower()
    if lower in _IRREGULAR:
        return _IRREGULAR[lower]
    if lower in _SINGULAR_S or lower in _IRREGULAR.values():
        return lower
    if lower.endswith("es") and lower[:-2] in _SINGULAR_S:
        return lower[:-2]
    if lower.endswith("ies") and len(lower) > 3:
        return lower[:-3] + "y"
    if lower.endswith(("sses", "xes", "ches", "shes", "zzes")):
        return lower[:-2]
    if lower.endswith(("ss", "us", "is")):
        return lower
    if lower.endswith("s") and len(lower) > 1:
        return lower[:-1]
    return lower


def table_key(table: str) -> str:
    """Normalised registry key and nested-property name for *table*."""
    return singularize(table.strip())

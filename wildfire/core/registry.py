"""SQL registry - named queries loaded from a directory of ``.sql`` files.

Namespace convention, where the first segment names the table whose
models the query returns:

    sql/users/active.sql          -> "users.active"      (table "users")
    sql/posts/by_author/all.sql   -> "posts.by_author.all"
"""

from __future__ import annotations

import logging
from pathlib import Path

from wildfire.core.exceptions import DuplicateQueryError, QueryNotFoundError

logger = logging.getLogger(__name__)


class SQLRegistry:
    """Loads and caches SQL files from a directory structure.

    Loaded once on construction and read-only afterwards. A missing root
    directory yields an empty registry.

    Raises:
        DuplicateQueryError: If two files resolve to the same query name.
    """

    def __init__(self, root_dir: Path | str) -> None:
        self._root_dir = Path(root_dir)
        self._queries: dict[str, str] = {}
        self._sources: dict[str, Path] = {}
        self._load()

    def _load(self) -> None:
        if not self._root_dir.is_dir():
            logger.debug("SQL directory %s does not exist; registry is empty", self._root_dir)
            return

        for sql_file in sorted(self._root_dir.rglob("*.sql")):
            parts = list(sql_file.relative_to(self._root_dir).with_suffix("").parts)
            name = ".".join(parts)

            if name in self._queries:
                raise DuplicateQueryError(name, str(self._sources[name]), str(sql_file))

            self._queries[name] = sql_file.read_text(encoding="utf-8").strip()
            self._sources[name] = sql_file

        logger.debug("Loaded %d named queries from %s", len(self._queries), self._root_dir)

    def get(self, query_name: str) -> str:
        """Return the SQL text registered under *query_name*.

        Raises:
            QueryNotFoundError: If no query matches the given name.
        """
        try:
            return self._queries[query_name]
        except KeyError:
            raise QueryNotFoundError(query_name) from None

    def has(self, query_name: str) -> bool:
        return query_name in self._queries

    @staticmethod
    def table_for(query_name: str) -> str:
        """Table a named query belongs to (its first namespace segment)."""
        return query_name.split(".", 1)[0]

    @property
    def query_names(self) -> list[str]:
        """All registered query names, sorted alphabetically."""
        return sorted(self._queries)

    def __len__(self) -> int:
        return len(self._queries)

"""Result mapper - turns a query result into a list of hydrated models."""

from __future__ import annotations

from typing import Any


class ResultMapper:
    """Maps every row of ``self.query`` through ``create_object``.

    ``self.query`` is either a result object exposing ``result()`` or an
    already materialised iterable of rows. ``self.table`` is the table
    remembered by the last ``get(table)`` call.
    """

    query: Any = None
    table: str = ""

    def create_object(self, table: str, row: Any) -> Any:
        raise NotImplementedError

    def get(self, table: str | None = None) -> Any:
        raise NotImplementedError

    def result(self) -> list[Any]:
        """Hydrated models for every row, in row order."""
        if not self.table:
            self.get()

        return [self.create_object(self.table, row) for row in self._get_query_result()]

    def _get_query_result(self) -> Any:
        """Rows of the current query."""
        result = self.query
        if callable(getattr(self.query, "result", None)):
            result = self.query.result()
        return result

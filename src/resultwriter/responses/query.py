"""Query result responses — Document list and paging views."""

from __future__ import annotations

import math
from typing import Any

from resultwriter.models.document import RenderedDocument
from resultwriter.models.request import DEFAULT_ROWS, PARAM_ROWS
from resultwriter.responses.base import StructuredResponse


class QueryResult(StructuredResponse):
    """Matched documents with totals, for templates that want plain lists."""

    @property
    def _result(self) -> dict[str, Any]:
        return self._response.get("response", {})

    @property
    def results(self) -> list[RenderedDocument]:
        return list(self._result.get("docs", []))

    @property
    def num_found(self) -> int:
        return int(self._result.get("numFound", 0))

    @property
    def start(self) -> int:
        return int(self._result.get("start", 0))

    @property
    def max_score(self) -> float | None:
        return self._result.get("maxScore")

    def __len__(self) -> int:
        return len(self._result.get("docs", []))


class PagedQueryResult(QueryResult):
    """QueryResult with page arithmetic for pagination controls.

    The page size comes from the ``rows`` request parameter, falling back to
    the default page size used when executing the query.
    """

    @property
    def rows(self) -> int:
        raw = self.params.get(PARAM_ROWS)
        if raw is None or raw == "":
            return DEFAULT_ROWS
        try:
            rows = int(raw)
        except ValueError:
            return DEFAULT_ROWS
        return max(rows, 0)

    @property
    def current_page(self) -> int:
        if self.rows == 0:
            return 1
        return self.start // self.rows + 1

    @property
    def page_count(self) -> int:
        if self.rows == 0:
            return 1
        return max(math.ceil(self.num_found / self.rows), 1)

    @property
    def has_previous(self) -> bool:
        return self.start > 0

    @property
    def has_next(self) -> bool:
        return self.start + len(self) < self.num_found

"""Parsed response — Eager, JSON-friendly view of a query response.

Unlike the template writer's lazy document sequence, parsing materializes
every document of the page up front.  The result has the shape::

    {
        "responseHeader": {"status": 0, "QTime": 3, "params": {...}},
        "response": {"numFound": 2, "start": 0, "maxScore": 1.0, "docs": [...]},
        ...  # any other response values, unchanged
    }
"""

from __future__ import annotations

from typing import Any

from resultwriter.models.request import QueryRequest
from resultwriter.models.response import HEADER_KEY, RESPONSE_KEY, QueryResponse
from resultwriter.models.result import ResultSet
from resultwriter.store.exceptions import StoreError
from resultwriter.writers.base.exceptions import RenderError


def parse_result_set(request: QueryRequest, result_set: ResultSet) -> dict[str, Any]:
    """Materialize every document of ``result_set``.

    Raises:
        RenderError: If a document cannot be read from the store.
    """
    docs = []
    for ref in result_set.iter_refs():
        try:
            docs.append(request.searcher.materialize(ref))
        except StoreError as e:
            raise RenderError(f"Error converting stored document {ref}: {e}") from e
    return {
        "numFound": result_set.num_found,
        "start": result_set.start,
        "maxScore": result_set.max_score,
        "docs": docs,
    }


def parse_response(request: QueryRequest, response: QueryResponse) -> dict[str, Any]:
    """Build the parsed form of ``response`` for ``request``."""
    parsed: dict[str, Any] = {}
    header = response.header
    header.setdefault("status", 0)
    header.setdefault("QTime", request.elapsed_ms())
    header.setdefault("params", dict(request.params))
    parsed[HEADER_KEY] = header

    for name, value in response.values.items():
        if name == HEADER_KEY:
            continue
        if isinstance(value, ResultSet):
            parsed[name] = parse_result_set(request, value)
        else:
            parsed[name] = value

    if RESPONSE_KEY not in parsed:
        parsed[RESPONSE_KEY] = parse_result_set(request, ResultSet())
    return parsed

"""Template context — What a template can see of one query.

``rawResponse`` gives templates lazy access to the result set plus
passthroughs to the request and response; nothing is pre-extracted.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from resultwriter.models.document import RenderedDocument
from resultwriter.store.exceptions import StoreError
from resultwriter.writers.base.exceptions import RenderError

if TYPE_CHECKING:
    from resultwriter.models.request import QueryRequest
    from resultwriter.models.response import QueryResponse
    from resultwriter.models.result import ResultSet
    from resultwriter.responses.base import StructuredResponse


class ResultIterator(Iterator[RenderedDocument]):
    """Single-pass iterator that materializes one document per step.

    Each ``next()`` reads exactly one document from the store and converts
    it through the schema.  The iterator cannot be restarted and does not
    support removal.
    """

    def __init__(self, result_set: ResultSet, request: QueryRequest) -> None:
        self._refs = result_set.iter_refs()
        self._request = request

    def __iter__(self) -> ResultIterator:
        return self

    def __next__(self) -> RenderedDocument:
        ref = next(self._refs)
        try:
            return self._request.searcher.materialize(ref)
        except StoreError as e:
            raise RenderError(f"Error converting stored document {ref} into a rendered document: {e}") from e

    def remove(self) -> None:
        """No-op: result sets are read-only."""


class RawResponse:
    """Helper exposing the raw query request and response to templates."""

    def __init__(self, request: QueryRequest, response: QueryResponse) -> None:
        self._request = request
        self._response = response

    def result_iterator(self) -> ResultIterator:
        """A new lazy document sequence over the response's result set."""
        return ResultIterator(self._response.result_set, self._request)

    def request_parameter(self, name: str) -> str | None:
        return self._request.get(name)

    @property
    def result_set(self) -> ResultSet:
        return self._response.result_set

    @property
    def request(self) -> QueryRequest:
        return self._request

    @property
    def response(self) -> QueryResponse:
        return self._response


def build_context(
    request: QueryRequest,
    response: QueryResponse,
    structured: StructuredResponse | None = None,
) -> dict[str, Any]:
    """Assemble the template context for one render."""
    context: dict[str, Any] = {
        "rawResponse": RawResponse(request, response),
        "params": dict(request.params),
    }
    if structured is not None:
        context["response"] = structured
    return context

"""Host query response — Ordered named values produced for one query."""

from __future__ import annotations

from typing import Any

from resultwriter.models.result import ResultSet

RESPONSE_KEY = "response"
HEADER_KEY = "responseHeader"


class QueryResponse:
    """Named values accumulated while a query executes.

    The ``"response"`` entry holds the query's :class:`ResultSet`; the
    ``"responseHeader"`` entry holds status, timing, and echoed parameters.
    Writers read from it and never modify it.
    """

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}

    def add(self, name: str, value: Any) -> None:
        self.values[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    @property
    def result_set(self) -> ResultSet:
        """The query's result set (an empty one if none was recorded)."""
        value = self.values.get(RESPONSE_KEY)
        if value is None:
            return ResultSet()
        if not isinstance(value, ResultSet):
            raise TypeError(f"'{RESPONSE_KEY}' value is {type(value).__name__}, not ResultSet")
        return value

    @property
    def header(self) -> dict[str, Any]:
        return dict(self.values.get(HEADER_KEY, {}))

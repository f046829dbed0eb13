"""Structured response base — Typed views over a parsed query response."""

from __future__ import annotations

from typing import Any


class StructuredResponse:
    """Base class for structured responses exposed to templates.

    Instances are created with no arguments by the type resolver and then
    populated once through :meth:`set_response`.
    """

    def __init__(self) -> None:
        self._response: dict[str, Any] = {}

    def set_response(self, parsed: dict[str, Any]) -> None:
        """Populate from a parsed response (see ``core.parsed``)."""
        self._response = parsed

    def get_response(self) -> dict[str, Any]:
        return self._response

    @property
    def header(self) -> dict[str, Any]:
        return dict(self._response.get("responseHeader", {}))

    @property
    def status(self) -> int:
        return int(self.header.get("status", 0))

    @property
    def q_time(self) -> int:
        return int(self.header.get("QTime", 0))

    @property
    def params(self) -> dict[str, str]:
        return dict(self.header.get("params", {}))

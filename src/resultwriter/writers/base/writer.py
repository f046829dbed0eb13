"""Base response writer — Abstract interface for all output formats.

The host calls a writer in two independent steps:
  1. ``get_content_type()`` to choose the response header
  2. ``write()`` to produce the body

Both receive the same request and response objects; neither may modify them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from resultwriter.models.request import QueryRequest
    from resultwriter.models.response import QueryResponse


class ResponseWriter(ABC):
    """Abstract base class for response writers.

    All writers must implement:
      - name: Registry name (the ``wt`` parameter value)
      - write(): Emit the response body
      - get_content_type(): Report the body's content type

    One writer instance serves every request, so per-request state belongs
    in locals, never on ``self``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique writer name (e.g., 'template', 'json')."""

    def init(self, args: Mapping[str, Any]) -> None:
        """Configure the writer from its registry arguments. Called once."""

    @abstractmethod
    def write(self, writer: TextIO, request: QueryRequest, response: QueryResponse) -> None:
        """Write the response body for ``request`` to ``writer``."""

    @abstractmethod
    def get_content_type(self, request: QueryRequest, response: QueryResponse) -> str:
        """Return the content type of the body ``write()`` would produce.

        Must be idempotent and free of side effects.
        """

"""Base result store — Abstract interface for document storage backends.

A store maps an integer document reference (its position in the store) to
the document's raw stored fields.  Stores are responsible for:
  1. Opening and closing their backing resources
  2. Returning stored fields for a reference
  3. Reporting health status
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, Field


class StoreHealth(BaseModel):
    """Health status of a result store."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    num_docs: int = Field(default=0, description="Number of documents held by the store")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class ResultStore(ABC):
    """Abstract base class for result stores.

    All stores must implement:
      - open() / close(): Resource lifecycle
      - doc(): Stored fields for one reference
      - max_doc: Number of addressable references
      - health_check(): Report store health

    A store is opened once at startup and shared by all requests; ``doc()``
    must not mutate store state visible to other callers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique store backend name (e.g., 'memory', 'jsonl')."""

    @abstractmethod
    def open(self) -> None:
        """Acquire backing resources. Called once during startup."""

    @abstractmethod
    def close(self) -> None:
        """Release backing resources. Called during shutdown."""

    @property
    @abstractmethod
    def max_doc(self) -> int:
        """Number of documents; valid references are ``0 .. max_doc - 1``."""

    @abstractmethod
    def doc(self, ref: int) -> dict[str, Any]:
        """Return the raw stored fields of the document at ``ref``.

        Raises:
            DocumentNotFoundError: If ``ref`` is not a valid reference.
            CorruptDocumentError: If the stored document cannot be decoded.
            StoreIOError: If the backing storage cannot be read.
        """

    @abstractmethod
    def health_check(self) -> StoreHealth:
        """Check the health of the store."""

    def iter_docs(self) -> Iterator[tuple[int, dict[str, Any]]]:
        """Yield ``(ref, stored_fields)`` for every document, in reference order."""
        for ref in range(self.max_doc):
            yield ref, self.doc(ref)

"""In-memory result store."""

from __future__ import annotations

import copy
import logging
from datetime import UTC, datetime
from typing import Any

from resultwriter.store.base import ResultStore, StoreHealth
from resultwriter.store.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


class MemoryStore(ResultStore):
    """Store that keeps documents in a list; the list index is the reference.

    Args:
        documents: Initial documents.
        **kwargs: Ignored; accepted for interface consistency.
    """

    def __init__(self, documents: list[dict[str, Any]] | None = None, **kwargs: Any) -> None:
        self._documents: list[dict[str, Any]] = [dict(d) for d in documents or []]
        self._opened = False

    @property
    def name(self) -> str:
        return "memory"

    def open(self) -> None:
        self._opened = True
        logger.info("Opened memory store with %d documents", len(self._documents))

    def close(self) -> None:
        self._opened = False

    @property
    def max_doc(self) -> int:
        return len(self._documents)

    def add(self, document: dict[str, Any]) -> int:
        """Append a document and return its reference."""
        self._documents.append(dict(document))
        return len(self._documents) - 1

    def doc(self, ref: int) -> dict[str, Any]:
        if not 0 <= ref < len(self._documents):
            raise DocumentNotFoundError(f"No document at reference {ref} (max_doc={len(self._documents)})")
        # callers get their own copy; stored documents stay untouched
        return copy.deepcopy(self._documents[ref])

    def health_check(self) -> StoreHealth:
        return StoreHealth(
            status="healthy" if self._opened else "unhealthy",
            num_docs=len(self._documents),
            last_check=datetime.now(UTC).isoformat(),
            message=None if self._opened else "Store not opened",
        )

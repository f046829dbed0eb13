"""JSON Lines result store — One stored document per line, read on demand.

An offset index is built when the store is opened; ``doc()`` seeks straight
to the document's line, so only the requested document is decoded.

Usage::

    store = JsonlStore(path="data/docs.jsonl")
    store.open()
    fields = store.doc(0)
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from resultwriter.store.base import ResultStore, StoreHealth
from resultwriter.store.exceptions import (
    ConfigurationError,
    CorruptDocumentError,
    DocumentNotFoundError,
    StoreIOError,
)

logger = logging.getLogger(__name__)


class JsonlStore(ResultStore):
    """Store backed by a JSON Lines file.

    Blank lines are not documents and do not consume a reference.

    Args:
        path: Path of the ``.jsonl`` file.
        encoding: Text encoding of the file.
        **kwargs: Ignored; accepted for interface consistency.
    """

    def __init__(self, path: str | Path | None = None, encoding: str = "utf-8", **kwargs: Any) -> None:
        if path is None:
            raise ConfigurationError("JsonlStore requires a 'path'")
        self._path = Path(path)
        self._encoding = encoding
        self._offsets: list[int] | None = None

    @property
    def name(self) -> str:
        return "jsonl"

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> None:
        """Scan the file and record the byte offset of every document line."""
        offsets: list[int] = []
        try:
            with open(self._path, "rb") as f:
                position = 0
                for line in f:
                    if line.strip():
                        offsets.append(position)
                    position += len(line)
        except OSError as e:
            raise StoreIOError(f"Failed to open JSONL store {self._path}: {e}") from e
        self._offsets = offsets
        logger.info("Opened JSONL store %s with %d documents", self._path, len(offsets))

    def close(self) -> None:
        self._offsets = None

    @property
    def max_doc(self) -> int:
        return len(self._offsets) if self._offsets is not None else 0

    def doc(self, ref: int) -> dict[str, Any]:
        if self._offsets is None:
            raise StoreIOError("JSONL store not opened.")
        if not 0 <= ref < len(self._offsets):
            raise DocumentNotFoundError(f"No document at reference {ref} (max_doc={len(self._offsets)})")

        try:
            with open(self._path, "rb") as f:
                f.seek(self._offsets[ref])
                line = f.readline()
        except OSError as e:
            raise StoreIOError(f"Failed to read document {ref} from {self._path}: {e}") from e

        try:
            data = json.loads(line.decode(self._encoding))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptDocumentError(f"Document {ref} in {self._path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CorruptDocumentError(f"Document {ref} in {self._path} is not a JSON object")
        return data

    def health_check(self) -> StoreHealth:
        if self._offsets is None:
            return StoreHealth(status="unhealthy", message="Store not opened")
        if not self._path.exists():
            return StoreHealth(
                status="unhealthy",
                num_docs=len(self._offsets),
                last_check=datetime.now(UTC).isoformat(),
                message=f"File missing: {self._path}",
            )
        return StoreHealth(
            status="healthy",
            num_docs=len(self._offsets),
            last_check=datetime.now(UTC).isoformat(),
            message=f"File: {self._path}",
        )

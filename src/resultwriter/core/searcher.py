"""Searcher — Matches a query against a result store and pages the matches.

The query language is intentionally small:

  - ``*:*`` or an empty query matches every document
  - ``field:term`` matches documents whose ``field`` contains ``term``
  - a bare ``term`` matches any stored text field containing it

Clauses are whitespace separated and all must match.  Matching is
case-insensitive substring matching, except on the schema's unique key where
the whole value must match.  A copy-field destination is searched with the
values of its sources.  The score of a document is the number of matched
clause values, and ties keep store order.
"""

from __future__ import annotations

import logging
from typing import Any

from resultwriter.models.document import RenderedDocument
from resultwriter.models.result import ResultSet
from resultwriter.schema.schema import IndexSchema
from resultwriter.store.base import ResultStore

logger = logging.getLogger(__name__)

MATCH_ALL = "*:*"


def _parse_clauses(q: str) -> list[tuple[str | None, str]]:
    """Split a query into ``(field, term)`` clauses; ``field`` is None for bare terms."""
    clauses: list[tuple[str | None, str]] = []
    for token in q.split():
        if token == MATCH_ALL:
            continue
        field, sep, term = token.partition(":")
        if sep and field and term:
            clauses.append((field, term.lower()))
        else:
            clauses.append((None, token.lower()))
    return clauses


def _values_of(stored: dict[str, Any], field: str) -> list[str]:
    raw = stored.get(field)
    if raw is None:
        return []
    values = raw if isinstance(raw, list) else [raw]
    return [str(v).lower() for v in values]


class Searcher:
    """Executes queries over one store.

    Attributes:
        store: The result store searched.
        schema: Schema describing the store's documents.
    """

    def __init__(self, store: ResultStore, schema: IndexSchema) -> None:
        self.store = store
        self.schema = schema

    def doc(self, ref: int) -> dict[str, Any]:
        """Raw stored fields of the document at ``ref``."""
        return self.store.doc(ref)

    def materialize(self, ref: int) -> RenderedDocument:
        """Stored fields of ``ref`` converted through the schema."""
        return self.schema.load_stored_fields(RenderedDocument(), self.doc(ref))

    def search(self, q: str | None, start: int = 0, rows: int = 10) -> ResultSet:
        """Run ``q`` and return the page ``[start, start + rows)`` of matches.

        Args:
            q: Query string.
            start: Offset of the first match to return.
            rows: Maximum number of matches to return.

        Returns:
            The page of matches with total count and scores.
        """
        if start < 0 or rows < 0:
            raise ValueError("start and rows must be non-negative")

        clauses = _parse_clauses(q or "")
        text_fields = self.schema.text_fields()

        matches: list[tuple[int, float]] = []
        for ref, stored in self.store.iter_docs():
            score = self._score(stored, clauses, text_fields)
            if score is not None:
                matches.append((ref, score))

        # stable sort keeps store order among equal scores
        matches.sort(key=lambda m: m[1], reverse=True)
        page = matches[start : start + rows]

        logger.debug("Query %r matched %d documents", q, len(matches))
        return ResultSet(
            doc_refs=tuple(ref for ref, _ in page),
            scores=tuple(score for _, score in page),
            num_found=len(matches),
            start=start,
            max_score=matches[0][1] if matches else None,
        )

    def _values(self, stored: dict[str, Any], field: str) -> list[str]:
        values = _values_of(stored, field)
        for source in self.schema.copy_sources(field):
            values.extend(_values_of(stored, source))
        return values

    def _matches(self, field: str, term: str, value: str) -> bool:
        if field == self.schema.unique_key:
            return term == value
        return term in value

    def _score(
        self,
        stored: dict[str, Any],
        clauses: list[tuple[str | None, str]],
        text_fields: list[str],
    ) -> float | None:
        if not clauses:
            return 1.0
        score = 0.0
        for field, term in clauses:
            fields = [field] if field is not None else text_fields
            hits = sum(1 for f in fields for value in self._values(stored, f) if self._matches(f, term, value))
            if hits == 0:
                return None
            score += hits
        return score

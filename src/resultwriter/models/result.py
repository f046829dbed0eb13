"""Result set model — Ordered page of document references for one query."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field, model_validator


class ResultSet(BaseModel):
    """Page of matched document references, in ranking order.

    References are internal store positions; they are only meaningful to the
    store that produced them.  The result set is read-only once built.
    """

    model_config = {"frozen": True}

    doc_refs: tuple[int, ...] = Field(default=(), description="Document references in result order")
    scores: tuple[float, ...] | None = Field(default=None, description="Per-reference scores, parallel to doc_refs")
    num_found: int = Field(default=0, ge=0, description="Total number of matches before paging")
    start: int = Field(default=0, ge=0, description="Offset of the first reference within all matches")
    max_score: float | None = Field(default=None, description="Highest score across all matches")

    @model_validator(mode="after")
    def _scores_match_refs(self) -> ResultSet:
        if self.scores is not None and len(self.scores) != len(self.doc_refs):
            raise ValueError("scores must be parallel to doc_refs")
        return self

    def __len__(self) -> int:
        return len(self.doc_refs)

    def iter_refs(self) -> Iterator[int]:
        """Return a fresh forward-only iterator over the references."""
        return iter(self.doc_refs)

    def score_of(self, position: int) -> float | None:
        """Score of the reference at ``position`` within this page."""
        if self.scores is None:
            return None
        return self.scores[position]

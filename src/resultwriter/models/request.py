"""Request models — Host query request and the template writer's view of it."""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from resultwriter.core.searcher import Searcher
    from resultwriter.schema.schema import IndexSchema

PARAM_TEMPLATE = "template"
PARAM_WRAP = "wrap"
PARAM_RESPONSE_TYPE = "responseType"
PARAM_CONTENT_TYPE = "contentType"
PARAM_ROWS = "rows"

DEFAULT_ROWS = 10


class QueryRequest:
    """One incoming query as seen by response writers.

    Attributes:
        params: Request parameters, one value per name.
        schema: Schema used to materialize stored documents.
        searcher: Searcher giving access to stored documents.
        start_time: Monotonic clock reading taken when the request was built.
    """

    def __init__(
        self,
        params: Mapping[str, str],
        schema: IndexSchema,
        searcher: Searcher,
    ) -> None:
        self.params: dict[str, str] = dict(params)
        self.schema = schema
        self.searcher = searcher
        self.start_time = time.monotonic()

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return a request parameter, or ``default`` when absent."""
        return self.params.get(name, default)

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start_time) * 1000)


class RenderRequest(BaseModel):
    """Template writer parameters extracted from a query request.

    ``wrap`` distinguishes absent (``None``) from empty (``""``): an empty
    callback name still enables wrapping.
    """

    template: str = Field(default="default", description="Template name without suffix")
    wrap: str | None = Field(default=None, description="Callback name for script wrapping")
    content_type: str | None = Field(default=None, description="Explicit content-type override")
    response_type: str | None = Field(default=None, description="Structured response type name")
    params: dict[str, str] = Field(default_factory=dict, description="All originating query parameters")

    @classmethod
    def from_params(cls, params: Mapping[str, str], default_template: str = "default") -> RenderRequest:
        """Build a render request from raw query parameters."""
        return cls(
            template=params.get(PARAM_TEMPLATE, default_template),
            wrap=params.get(PARAM_WRAP),
            content_type=params.get(PARAM_CONTENT_TYPE),
            response_type=params.get(PARAM_RESPONSE_TYPE),
            params=dict(params),
        )

    @property
    def is_wrapped(self) -> bool:
        return self.wrap is not None

"""ResultWriter Engine — Executes queries and hands them to response writers.

The engine manages the request lifecycle:
  1. Query Execution: Match the query against the store (Searcher)
  2. Response Assembly: Result set + response header (QueryResponse)
  3. Writer Selection: ``wt`` parameter or the configured default
  4. Output: Writer body rendered into a buffer, plus its content type

The body is fully rendered before it is returned, so a writer failure never
produces partial output.
"""

from __future__ import annotations

import io
import logging
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from resultwriter.core.searcher import Searcher
from resultwriter.models.request import DEFAULT_ROWS, PARAM_ROWS, QueryRequest
from resultwriter.models.response import HEADER_KEY, RESPONSE_KEY, QueryResponse
from resultwriter.observability.logging import bind_request_context
from resultwriter.responses.resolver import TypeResolver
from resultwriter.schema.schema import IndexSchema
from resultwriter.store.base import ResultStore
from resultwriter.store.registry import StoreRegistry
from resultwriter.writers.base.registry import WriterRegistry
from resultwriter.writers.json.writer import JsonResponseWriter
from resultwriter.writers.template.writer import TemplateResponseWriter

if TYPE_CHECKING:
    from resultwriter.config.settings import Settings

logger = logging.getLogger(__name__)

PARAM_QUERY = "q"
PARAM_START = "start"
PARAM_WRITER = "wt"


class WriterOutput(BaseModel):
    """Rendered body and the content type reported by its writer."""

    body: str = Field(description="Response body")
    content_type: str = Field(description="Content type reported by the writer")
    writer: str = Field(description="Name of the writer that produced the body")


def _int_param(params: Mapping[str, str], name: str, default: int) -> int:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"Parameter '{name}' must be an integer, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"Parameter '{name}' must be non-negative, got {value}")
    return value


class ResultWriterEngine:
    """Core orchestrator: one store, one searcher, a registry of writers.

    Attributes:
        settings: Application configuration.
        schema: Schema of the stored documents.
        store_registry: Registry of store backends.
        writer_registry: Registry of response writers.
        type_resolver: Resolver shared by writers for ``responseType``.
    """

    def __init__(self, settings: Settings, store: ResultStore | None = None) -> None:
        self.settings = settings
        self.schema = IndexSchema.from_settings(settings.index)
        self.store_registry = StoreRegistry()
        self.writer_registry = WriterRegistry(default=settings.writers.default_writer)
        self.type_resolver = TypeResolver(namespace=settings.writers.response_namespace)
        self._store = store
        self._searcher: Searcher | None = Searcher(store, self.schema) if store is not None else None

    def initialize(self) -> None:
        """Open the configured store and register the built-in writers."""
        if self._store is None:
            store_cfg = self.settings.store
            kwargs: dict[str, object] = {}
            if store_cfg.path is not None:
                kwargs["path"] = store_cfg.path
            if store_cfg.documents:
                kwargs["documents"] = store_cfg.documents
            self._store = self.store_registry.create(store_cfg.backend, **kwargs)
            self._searcher = Searcher(self._store, self.schema)

        self.writer_registry.register("template", TemplateResponseWriter)
        self.writer_registry.register("json", JsonResponseWriter)
        writer_args = self.settings.writers.args
        self.writer_registry.initialize_writer(
            "template",
            writer_args.get("template"),
            templates=self.settings.templates,
            type_resolver=self.type_resolver,
        )
        self.writer_registry.initialize_writer("json", writer_args.get("json"))
        logger.info("ResultWriter engine initialized")

    def shutdown(self) -> None:
        """Close the store."""
        if self._store is not None:
            self._store.close()
        logger.info("ResultWriter engine shut down")

    @property
    def store(self) -> ResultStore:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call initialize() first.")
        return self._store

    @property
    def searcher(self) -> Searcher:
        if self._searcher is None:
            raise RuntimeError("Engine not initialized. Call initialize() first.")
        return self._searcher

    # ──────────────────────────────────────────────────────────────────────
    # Query execution
    # ──────────────────────────────────────────────────────────────────────

    def execute(self, params: Mapping[str, str]) -> tuple[QueryRequest, QueryResponse]:
        """Run the query described by ``params``.

        Raises:
            ValueError: If ``start`` or ``rows`` is not a non-negative integer.
        """
        start = _int_param(params, PARAM_START, 0)
        rows = _int_param(params, PARAM_ROWS, DEFAULT_ROWS)

        request = QueryRequest(params, self.schema, self.searcher)
        response = QueryResponse()
        result_set = self.searcher.search(params.get(PARAM_QUERY), start=start, rows=rows)
        response.add(HEADER_KEY, {"status": 0, "QTime": request.elapsed_ms(), "params": dict(params)})
        response.add(RESPONSE_KEY, result_set)
        return request, response

    def respond(self, params: Mapping[str, str]) -> WriterOutput:
        """Execute ``params`` and render the result with the selected writer.

        Raises:
            WriterNotFoundError: If ``wt`` names an unknown writer.
            WriterError: If the writer fails (template, type, or render error).
            StoreError: If the store cannot be read while searching.
        """
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        writer = self.writer_registry.get(params.get(PARAM_WRITER))
        bind_request_context(request_id=request_id, writer=writer.name)

        request, response = self.execute(params)
        content_type = writer.get_content_type(request, response)
        buffer = io.StringIO()
        writer.write(buffer, request, response)

        logger.info(
            "Rendered %d of %d results with writer '%s' in %dms",
            len(response.result_set),
            response.result_set.num_found,
            writer.name,
            request.elapsed_ms(),
        )
        return WriterOutput(body=buffer.getvalue(), content_type=content_type, writer=writer.name)

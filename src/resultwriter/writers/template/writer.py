"""Template response writer — Renders query results through a named template.

Request parameters:

  - ``template``: template name without suffix (default ``"default"``)
  - ``wrap``: callback name; when present (even empty) the output is
    wrapped as ``name({"result":"<escaped output>"})`` for script-tag use
  - ``contentType``: literal content-type override
  - ``responseType``: structured response type made available to the
    template as ``response`` (short names resolve in
    ``resultwriter.responses``, dotted paths are imported)

Templates see ``rawResponse`` (lazy documents and request/response
passthroughs), ``params``, and optionally ``response``.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TextIO

from resultwriter.config.settings import TemplateSettings
from resultwriter.core.parsed import parse_response
from resultwriter.models.request import RenderRequest
from resultwriter.responses.resolver import TypeResolver
from resultwriter.writers.base.writer import ResponseWriter
from resultwriter.writers.json.writer import CONTENT_TYPE_JSON_UTF8
from resultwriter.writers.template.context import build_context
from resultwriter.writers.template.loader import TemplateLoader

if TYPE_CHECKING:
    from resultwriter.models.request import QueryRequest
    from resultwriter.models.response import QueryResponse

logger = logging.getLogger(__name__)

CONTENT_TYPE_HTML = "text/html"


def wrap_json(text: str) -> str:
    """Embed ``text`` as the ``result`` string of a one-field JSON object.

    Only backslash, newline, carriage return and double quote are escaped.
    Backslashes go first so the backslashes introduced by the later
    replacements are not escaped again.
    """
    escaped = text.replace("\\", "\\\\")
    escaped = escaped.replace("\n", "\\n")
    escaped = escaped.replace("\r", "\\r")
    escaped = escaped.replace('"', '\\"')
    return '{"result":"' + escaped + '"}'


class TemplateResponseWriter(ResponseWriter):
    """Response writer backed by Jinja2 templates.

    A fresh :class:`TemplateLoader` is built for every render from the
    writer's template settings, so renders share no template state.

    Args:
        templates: Template directory and Jinja2 options.
        type_resolver: Resolver for ``responseType`` names.
    """

    def __init__(
        self,
        templates: TemplateSettings | None = None,
        type_resolver: TypeResolver | None = None,
    ) -> None:
        self._templates = templates or TemplateSettings()
        self._resolver = type_resolver or TypeResolver()

    @property
    def name(self) -> str:
        return "template"

    @property
    def templates(self) -> TemplateSettings:
        return self._templates

    @property
    def type_resolver(self) -> TypeResolver:
        return self._resolver

    def init(self, args: Mapping[str, Any]) -> None:
        """Apply template overrides (``directory``, ``suffix``, ...) and ``response_namespace``."""
        overrides = {k: v for k, v in args.items() if k in TemplateSettings.model_fields}
        if overrides:
            self._templates = TemplateSettings.model_validate({**self._templates.model_dump(), **overrides})
        if "response_namespace" in args:
            self._resolver.namespace = str(args["response_namespace"])

    def render_request(self, request: QueryRequest) -> RenderRequest:
        return RenderRequest.from_params(request.params, self._templates.default_template)

    def get_content_type(self, request: QueryRequest, response: QueryResponse) -> str:
        render_request = self.render_request(request)
        if render_request.content_type is not None:
            return render_request.content_type
        if render_request.is_wrapped:
            return CONTENT_TYPE_JSON_UTF8
        return CONTENT_TYPE_HTML

    def _new_loader(self) -> TemplateLoader:
        return TemplateLoader(
            self._templates.directory,
            suffix=self._templates.suffix,
            autoescape=self._templates.autoescape,
            trim_blocks=self._templates.trim_blocks,
            lstrip_blocks=self._templates.lstrip_blocks,
        )

    def write(self, writer: TextIO, request: QueryRequest, response: QueryResponse) -> None:
        """Render ``request``'s results to ``writer``.

        Raises:
            TemplateError: Template missing, outside the directory, or broken.
            TypeResolutionError: ``responseType`` does not name a structured response.
            RenderError: A document could not be read while rendering.
        """
        render_request = self.render_request(request)
        loader = self._new_loader()
        template = loader.get_template(render_request.template)

        structured = None
        if render_request.response_type is not None:
            structured = self._resolver.resolve(render_request.response_type)
            structured.set_response(parse_response(request, response))

        context = build_context(request, response, structured)
        logger.debug(
            "Rendering template '%s' (wrapped=%s, response_type=%s)",
            render_request.template,
            render_request.is_wrapped,
            render_request.response_type,
        )

        if render_request.is_wrapped:
            text = loader.merge(template, context)
            writer.write(f"{render_request.wrap}({wrap_json(text)})")
        else:
            loader.merge_into(template, context, writer)

    def render(self, request: QueryRequest, response: QueryResponse) -> str:
        """Render to a string (see :meth:`write`)."""
        buffer = io.StringIO()
        self.write(buffer, request, response)
        return buffer.getvalue()

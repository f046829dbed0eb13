"""JSON response writer — The parsed response serialized as JSON.

Request parameters:

  - ``json.wrf``: callback name; the JSON body is emitted as ``name(...)``
  - ``indent``: ``on``/``true`` for indented output
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, TextIO

from resultwriter.core.parsed import parse_response
from resultwriter.writers.base.writer import ResponseWriter

if TYPE_CHECKING:
    from resultwriter.models.request import QueryRequest
    from resultwriter.models.response import QueryResponse

CONTENT_TYPE_JSON_UTF8 = "text/x-json; charset=UTF-8"

PARAM_WRAPPER_FUNCTION = "json.wrf"
PARAM_INDENT = "indent"


def _default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class JsonResponseWriter(ResponseWriter):
    """Writes the parsed query response as a JSON document."""

    def __init__(self) -> None:
        self._indent: int | None = None

    @property
    def name(self) -> str:
        return "json"

    def init(self, args: Mapping[str, Any]) -> None:
        if "indent" in args:
            self._indent = int(args["indent"]) or None

    def get_content_type(self, request: QueryRequest, response: QueryResponse) -> str:
        return CONTENT_TYPE_JSON_UTF8

    def write(self, writer: TextIO, request: QueryRequest, response: QueryResponse) -> None:
        indent = self._indent
        if (request.get(PARAM_INDENT) or "").lower() in {"on", "true"}:
            indent = indent or 2

        body = json.dumps(parse_response(request, response), ensure_ascii=False, indent=indent, default=_default)
        wrapper = request.get(PARAM_WRAPPER_FUNCTION)
        if wrapper is not None:
            writer.write(f"{wrapper}({body})")
        else:
            writer.write(body)

"""Tests for the JSON response writer."""

from __future__ import annotations

import io
import json

import pytest

from resultwriter.core.engine import ResultWriterEngine
from resultwriter.writers.json.writer import CONTENT_TYPE_JSON_UTF8, JsonResponseWriter


@pytest.fixture
def writer(engine: ResultWriterEngine) -> JsonResponseWriter:
    w = engine.writer_registry.get("json")
    assert isinstance(w, JsonResponseWriter)
    return w


def _write(writer: JsonResponseWriter, request, response) -> str:
    buffer = io.StringIO()
    writer.write(buffer, request, response)
    return buffer.getvalue()


class TestJsonWriter:
    def test_content_type(self, writer: JsonResponseWriter, execute) -> None:
        request, response = execute(wrap="cb", contentType="text/plain")
        assert writer.get_content_type(request, response) == CONTENT_TYPE_JSON_UTF8

    def test_body(self, writer: JsonResponseWriter, execute) -> None:
        request, response = execute(q="solar", rows="1")
        body = json.loads(_write(writer, request, response))

        assert body["responseHeader"]["status"] == 0
        assert body["responseHeader"]["params"] == {"q": "solar", "rows": "1"}
        assert body["response"]["numFound"] == 2
        assert body["response"]["start"] == 0
        assert [d["id"] for d in body["response"]["docs"]] == ["doc1"]
        assert body["response"]["docs"][0]["tags"] == ["solar", "forecasting"]

    def test_empty_results(self, writer: JsonResponseWriter, execute) -> None:
        request, response = execute(q="zzz")
        body = json.loads(_write(writer, request, response))
        assert body["response"] == {"numFound": 0, "start": 0, "maxScore": None, "docs": []}

    def test_wrapper_function(self, writer: JsonResponseWriter, execute) -> None:
        request, response = execute(q="wind", **{"json.wrf": "handle"})
        output = _write(writer, request, response)
        assert output.startswith("handle(") and output.endswith(")")
        assert json.loads(output[len("handle(") : -1])["response"]["numFound"] == 1

    def test_indent_param(self, writer: JsonResponseWriter, execute) -> None:
        request, response = execute(q="wind", indent="on")
        assert "\n" in _write(writer, request, response)

    def test_compact_by_default(self, writer: JsonResponseWriter, execute) -> None:
        request, response = execute(q="wind")
        assert "\n" not in _write(writer, request, response)

    def test_init_indent(self) -> None:
        w = JsonResponseWriter()
        w.init({"indent": 4})
        assert w._indent == 4

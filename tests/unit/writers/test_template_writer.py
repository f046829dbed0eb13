"""Tests for the template response writer."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from resultwriter.config.settings import TemplateSettings
from resultwriter.core.engine import ResultWriterEngine
from resultwriter.store.exceptions import CorruptDocumentError, StoreIOError
from resultwriter.writers.base.exceptions import RenderError, TemplateError, TypeResolutionError
from resultwriter.writers.json.writer import CONTENT_TYPE_JSON_UTF8
from resultwriter.writers.template.loader import TemplateLoader
from resultwriter.writers.template.writer import TemplateResponseWriter, wrap_json

# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def writer(engine: ResultWriterEngine) -> TemplateResponseWriter:
    w = engine.writer_registry.get("template")
    assert isinstance(w, TemplateResponseWriter)
    return w


def _unwrap(output: str, callback: str) -> str:
    """Decode the ``result`` field of a wrapped payload."""
    assert output.startswith(f"{callback}(") and output.endswith(")")
    return json.loads(output[len(callback) + 1 : -1])["result"]


# ══════════════════════════════════════════════════════════════════════════════
# Content type selection
# ══════════════════════════════════════════════════════════════════════════════


class TestContentType:
    def test_default_is_html(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute()
        assert writer.get_content_type(request, response) == "text/html"

    def test_wrap_implies_json(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(wrap="cb")
        assert writer.get_content_type(request, response) == CONTENT_TYPE_JSON_UTF8

    def test_empty_wrap_implies_json(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(wrap="")
        assert writer.get_content_type(request, response) == CONTENT_TYPE_JSON_UTF8

    def test_override_wins_over_wrap(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(contentType="text/plain", wrap="cb")
        assert writer.get_content_type(request, response) == "text/plain"

    def test_override_without_wrap(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(contentType="application/xml")
        assert writer.get_content_type(request, response) == "application/xml"

    def test_idempotent_and_independent_of_render(self, writer: TemplateResponseWriter, execute) -> None:
        # template does not exist; content type must not care
        request, response = execute(wrap="cb", template="missing")
        first = writer.get_content_type(request, response)
        assert writer.get_content_type(request, response) == first
        assert request.params == {"wrap": "cb", "template": "missing"}


# ══════════════════════════════════════════════════════════════════════════════
# Rendering
# ══════════════════════════════════════════════════════════════════════════════


class TestRender:
    def test_missing_template_param_uses_default(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute()
        assert writer.render(request, response) == "default:doc1;doc2;doc3;"

    def test_named_template(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="titles", q="solar")
        assert writer.render(request, response) == "Solar Irradiance Nowcasting\nSolar Panel Degradation\n"

    def test_nested_template_name(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="sub/nested")
        assert writer.render(request, response) == "nested"

    def test_unwrapped_output_is_unmodified(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="literal")
        assert writer.render(request, response) == 'He said "hi"\n'

    def test_request_parameter_passthrough(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="param", q="wind")
        assert writer.render(request, response) == "q=wind"

    def test_multi_valued_fields(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="tags", q="solar")
        assert writer.render(request, response) == "solar+forecasting;solar+photovoltaic;"

    def test_empty_result_set(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(q="nothing-matches-this")
        assert writer.render(request, response) == "default:"

    def test_write_streams_to_writer(self, writer: TemplateResponseWriter, execute) -> None:
        import io

        request, response = execute(template="x")
        buffer = io.StringIO()
        writer.write(buffer, request, response)
        assert buffer.getvalue() == "X"


class TestWrap:
    def test_wrap_escapes_quotes_and_newline(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="literal", wrap="cb")
        output = writer.render(request, response)
        assert output == 'cb({"result":"He said \\"hi\\"\\n"})'
        assert "\n" not in output
        assert _unwrap(output, "cb") == 'He said "hi"\n'

    def test_empty_wrap_name_still_wraps(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="x", wrap="")
        assert writer.render(request, response) == '({"result":"X"})'

    def test_wrapped_documents(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="titles", q="wind", wrap="show")
        assert _unwrap(writer.render(request, response), "show") == "Offshore Wind Power\n"


class TestWrapJson:
    def test_backslash_escaped_first(self) -> None:
        assert wrap_json("\\n") == '{"result":"\\\\n"}'

    def test_carriage_return(self) -> None:
        assert wrap_json("a\rb") == '{"result":"a\\rb"}'

    @pytest.mark.parametrize(
        "text",
        [
            "",
            'He said "hi"\n',
            "C:\\temp\\new\r\n",
            '\\"',
            "<p class=\"x\">\n</p>",
        ],
    )
    def test_round_trip(self, text: str) -> None:
        assert json.loads(wrap_json(text))["result"] == text


# ══════════════════════════════════════════════════════════════════════════════
# Errors
# ══════════════════════════════════════════════════════════════════════════════


class TestErrors:
    def test_missing_template(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="nope")
        with pytest.raises(TemplateError, match="not found"):
            writer.render(request, response)

    def test_broken_template(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="broken")
        with pytest.raises(TemplateError, match="failed to parse"):
            writer.render(request, response)

    @pytest.mark.parametrize("name", ["../secret", "sub/../../secret", "/etc/passwd", "..\\secret"])
    def test_path_traversal_rejected(self, writer: TemplateResponseWriter, execute, name: str) -> None:
        request, response = execute(template=name)
        with pytest.raises(TemplateError, match="outside"):
            writer.render(request, response)

    def test_unresolvable_response_type_prevents_execution(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="x", responseType="NoSuchResult")
        with (
            patch.object(TemplateLoader, "merge_into") as merge_into,
            patch.object(TemplateLoader, "merge") as merge,
            pytest.raises(TypeResolutionError),
        ):
            writer.render(request, response)
        merge_into.assert_not_called()
        merge.assert_not_called()

    def test_non_conforming_response_type(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="x", responseType="json.JSONDecoder")
        with pytest.raises(TypeResolutionError, match="not a StructuredResponse"):
            writer.render(request, response)

    def test_corrupt_document_aborts_render(
        self, writer: TemplateResponseWriter, engine: ResultWriterEngine, execute
    ) -> None:
        request, response = execute()
        with (
            patch.object(engine.searcher, "materialize", side_effect=CorruptDocumentError("bad bytes")),
            pytest.raises(RenderError, match="bad bytes"),
        ):
            writer.render(request, response)

    def test_io_failure_aborts_render(self, writer: TemplateResponseWriter, engine: ResultWriterEngine, execute) -> None:
        request, response = execute(template="titles")
        with (
            patch.object(engine.store, "doc", side_effect=StoreIOError("disk gone")),
            pytest.raises(RenderError),
        ):
            writer.render(request, response)


# ══════════════════════════════════════════════════════════════════════════════
# Structured responses
# ══════════════════════════════════════════════════════════════════════════════


class TestStructuredResponse:
    def test_short_name_resolves_in_default_namespace(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(template="paged", responseType="PagedQueryResult", rows="2")
        assert writer.render(request, response) == "3|1/2"

    def test_dotted_name(self, writer: TemplateResponseWriter, execute) -> None:
        request, response = execute(
            template="paged",
            responseType="resultwriter.responses.query.PagedQueryResult",
            rows="2",
            start="2",
        )
        assert writer.render(request, response) == "3|2/2"


# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════


class TestInit:
    def test_init_overrides_template_settings(self, template_dir, execute) -> None:
        (template_dir / "custom.html").write_text("custom suffix", encoding="utf-8")
        w = TemplateResponseWriter(TemplateSettings(directory=template_dir))
        w.init({"suffix": ".html", "default_template": "custom"})

        request, response = execute()
        assert w.render(request, response) == "custom suffix"

    def test_init_sets_response_namespace(self) -> None:
        w = TemplateResponseWriter()
        w.init({"response_namespace": "my.responses."})
        assert w.type_resolver.namespace == "my.responses."

    def test_name(self) -> None:
        assert TemplateResponseWriter().name == "template"

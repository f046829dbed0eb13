"""Tests for the ResultWriter engine (execution, writer selection, output)."""

from __future__ import annotations

import json

import pytest

from resultwriter.config.settings import Settings
from resultwriter.core.engine import ResultWriterEngine
from resultwriter.models.response import HEADER_KEY
from resultwriter.store.memory import MemoryStore
from resultwriter.writers.base.exceptions import TemplateError
from resultwriter.writers.base.registry import WriterNotFoundError
from resultwriter.writers.json.writer import CONTENT_TYPE_JSON_UTF8

# ══════════════════════════════════════════════════════════════════════════════
# Lifecycle
# ══════════════════════════════════════════════════════════════════════════════


class TestLifecycle:
    def test_not_initialized(self, settings: Settings) -> None:
        eng = ResultWriterEngine(settings)
        with pytest.raises(RuntimeError, match="not initialized"):
            _ = eng.searcher

    def test_initialize_registers_writers(self, engine: ResultWriterEngine) -> None:
        assert engine.writer_registry.active_writers == ["template", "json"]
        assert engine.store.name == "memory"

    def test_injected_store(self, settings: Settings) -> None:
        store = MemoryStore([{"id": "only", "title": "Injected"}])
        store.open()
        eng = ResultWriterEngine(settings, store=store)
        eng.initialize()
        assert eng.store is store
        assert eng.respond({}).body == "default:only;"

    def test_writer_args_from_settings(self, settings: Settings) -> None:
        settings.writers.args = {"template": {"default_template": "x"}}
        eng = ResultWriterEngine(settings)
        eng.initialize()
        assert eng.respond({}).body == "X"


# ══════════════════════════════════════════════════════════════════════════════
# Execution
# ══════════════════════════════════════════════════════════════════════════════


class TestExecute:
    def test_header_and_result_set(self, engine: ResultWriterEngine) -> None:
        request, response = engine.execute({"q": "wind"})
        assert response.header["status"] == 0
        assert response.header["params"] == {"q": "wind"}
        assert response.result_set.doc_refs == (1,)
        assert request.get("q") == "wind"

    @pytest.mark.parametrize("params", [{"rows": "ten"}, {"start": "-1"}])
    def test_bad_paging_params(self, engine: ResultWriterEngine, params: dict[str, str]) -> None:
        with pytest.raises(ValueError):
            engine.execute(params)

    def test_response_holds_only_named_values(self, engine: ResultWriterEngine) -> None:
        _, response = engine.execute({})
        assert list(response.values) == [HEADER_KEY, "response"]
        assert vars(response) == {"values": response.values}

    def test_empty_paging_params_use_defaults(self, engine: ResultWriterEngine) -> None:
        _, response = engine.execute({"rows": "", "start": ""})
        assert len(response.result_set) == 3


# ══════════════════════════════════════════════════════════════════════════════
# Respond
# ══════════════════════════════════════════════════════════════════════════════


class TestRespond:
    def test_default_writer_is_template(self, engine: ResultWriterEngine) -> None:
        output = engine.respond({"q": "solar"})
        assert output.writer == "template"
        assert output.content_type == "text/html"
        assert output.body == "default:doc1;doc3;"

    def test_wrapped(self, engine: ResultWriterEngine) -> None:
        output = engine.respond({"template": "x", "wrap": "cb"})
        assert output.content_type == CONTENT_TYPE_JSON_UTF8
        assert output.body == 'cb({"result":"X"})'

    def test_json_writer(self, engine: ResultWriterEngine) -> None:
        output = engine.respond({"wt": "json", "q": "wind"})
        assert output.content_type == CONTENT_TYPE_JSON_UTF8
        body = json.loads(output.body)
        assert body[HEADER_KEY]["params"]["wt"] == "json"
        assert [d["id"] for d in body["response"]["docs"]] == ["doc2"]

    def test_unknown_writer(self, engine: ResultWriterEngine) -> None:
        with pytest.raises(WriterNotFoundError):
            engine.respond({"wt": "velocity"})

    def test_writer_error_propagates(self, engine: ResultWriterEngine) -> None:
        with pytest.raises(TemplateError):
            engine.respond({"template": "missing"})

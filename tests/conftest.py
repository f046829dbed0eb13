"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from resultwriter.config.settings import Settings
from resultwriter.core.engine import ResultWriterEngine
from resultwriter.models.request import QueryRequest
from resultwriter.models.response import QueryResponse

SAMPLE_DOCS: list[dict[str, Any]] = [
    {
        "id": "doc1",
        "title": "Solar Irradiance Nowcasting",
        "content": "Short-term solar irradiance forecasting from satellite imagery.",
        "tags": ["solar", "forecasting"],
        "year": 2024,
    },
    {
        "id": "doc2",
        "title": "Offshore Wind Power",
        "content": "Turbine wake modelling for offshore wind farms.",
        "tags": ["wind"],
        "year": 2022,
    },
    {
        "id": "doc3",
        "title": "Solar Panel Degradation",
        "content": "Long-term efficiency loss of photovoltaic panels.",
        "tags": ["solar", "photovoltaic"],
        "year": 2021,
        "internal_note": "not in schema",
    },
]

TEMPLATES: dict[str, str] = {
    "default.j2": "default:{% for doc in rawResponse.result_iterator() %}{{ doc.id }};{% endfor %}",
    "titles.j2": "{% for doc in rawResponse.result_iterator() %}{{ doc.title }}\n{% endfor %}",
    "literal.j2": 'He said "hi"\n',
    "x.j2": "X",
    "broken.j2": "{% for %}",
    "param.j2": "q={{ rawResponse.request_parameter('q') }}",
    "paged.j2": "{{ response.num_found }}|{{ response.current_page }}/{{ response.page_count }}",
    "tags.j2": "{% for doc in rawResponse.result_iterator() %}{{ doc.tags | join_values('+') }};{% endfor %}",
}


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Directory holding the test templates."""
    directory = tmp_path / "templates"
    directory.mkdir()
    for name, body in TEMPLATES.items():
        (directory / name).write_text(body, encoding="utf-8")
    (directory / "sub").mkdir()
    (directory / "sub" / "nested.j2").write_text("nested", encoding="utf-8")
    (tmp_path / "secret.j2").write_text("secret", encoding="utf-8")
    return directory


@pytest.fixture
def settings(template_dir: Path) -> Settings:
    """Create a test Settings instance backed by the memory store."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        templates={"directory": template_dir},
        index={
            "fields": [
                {"name": "id"},
                {"name": "title", "type": "text"},
                {"name": "content", "type": "text"},
                {"name": "tags", "type": "string", "multi_valued": True},
                {"name": "year", "type": "int"},
            ],
        },
        store={"backend": "memory", "documents": SAMPLE_DOCS},
    )


@pytest.fixture
def engine(settings: Settings) -> Iterator[ResultWriterEngine]:
    """Initialized engine over the sample documents."""
    eng = ResultWriterEngine(settings)
    eng.initialize()
    yield eng
    eng.shutdown()


@pytest.fixture
def execute(engine: ResultWriterEngine):
    """Run a query and return its (request, response) pair."""

    def _execute(**params: str) -> tuple[QueryRequest, QueryResponse]:
        return engine.execute(params)

    return _execute

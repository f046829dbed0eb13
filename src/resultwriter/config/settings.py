"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (RESULTWRITER_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8983, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class TemplateSettings(BaseModel):
    """Template lookup configuration for the ``template`` writer."""

    directory: Path = Field(default=Path("templates"), description="Directory templates are loaded from")
    suffix: str = Field(default=".j2", description="File suffix appended to template names")
    default_template: str = Field(default="default", description="Template used when none is requested")
    autoescape: bool = Field(default=False, description="Enable Jinja2 HTML autoescaping")
    trim_blocks: bool = Field(default=True, description="Strip the first newline after a block tag")
    lstrip_blocks: bool = Field(default=True, description="Strip whitespace before a block tag")


class FieldConfig(BaseModel):
    """Declaration of one schema field."""

    name: str = Field(description="Field name")
    type: Literal["string", "text", "int", "float", "bool", "date"] = Field(
        default="string", description="Field value type"
    )
    stored: bool = Field(default=True, description="Whether the field value is retrievable")
    multi_valued: bool = Field(default=False, description="Whether the field holds a list of values")


class IndexSettings(BaseModel):
    """Schema of the documents held by the result store."""

    unique_key: str = Field(default="id", description="Field holding the document identifier")
    fields: list[FieldConfig] = Field(
        default_factory=lambda: [
            FieldConfig(name="id"),
            FieldConfig(name="title", type="text"),
            FieldConfig(name="content", type="text"),
        ],
        description="Declared fields",
    )
    copy_fields: dict[str, str] = Field(default_factory=dict, description="Copy-field source -> destination")


class StoreSettings(BaseModel):
    """Result store configuration."""

    backend: str = Field(default="memory", description="Store backend: memory, jsonl")
    path: Path | None = Field(default=None, description="Data file for file-backed stores")
    documents: list[dict[str, Any]] = Field(
        default_factory=list, description="Seed documents for the memory backend"
    )


class WriterSettings(BaseModel):
    """Response writer configuration."""

    default_writer: str = Field(default="template", description="Writer used when 'wt' is absent")
    response_namespace: str = Field(
        default="resultwriter.responses.",
        description="Module prefix searched for short 'responseType' names",
    )
    args: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Per-writer init arguments, keyed by writer name"
    )

    @field_validator("response_namespace")
    @classmethod
    def _ensure_trailing_dot(cls, v: str) -> str:
        return v if not v or v.endswith(".") else f"{v}."


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the RESULTWRITER_ prefix.
    Nested settings use double underscores: RESULTWRITER_SERVER__PORT=9090

    Example:
        RESULTWRITER_SERVER__PORT=9090
        RESULTWRITER_TEMPLATES__DIRECTORY=/etc/resultwriter/templates
        RESULTWRITER_STORE__BACKEND=jsonl
    """

    model_config = {
        "env_prefix": "RESULTWRITER_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="ResultWriter", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    server: ServerSettings = Field(default_factory=ServerSettings)
    templates: TemplateSettings = Field(default_factory=TemplateSettings)
    index: IndexSettings = Field(default_factory=IndexSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    writers: WriterSettings = Field(default_factory=WriterSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the file are passed as init arguments, so they win over
        environment variables; absent keys still fall back to the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

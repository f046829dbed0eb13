"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resultwriter import __version__
from resultwriter.api.deps import set_engine
from resultwriter.api.v1.router import router as v1_router
from resultwriter.config.settings import Settings
from resultwriter.core.engine import ResultWriterEngine
from resultwriter.observability.logging import setup_logging

logger = logging.getLogger(__name__)

# Set by `resultwriter serve` so that uvicorn worker and reload processes
# build the app from the same configuration as the CLI.
CONFIG_FILE_ENV = "RESULTWRITER_CONFIG_FILE"
LOG_LEVEL_ENV = "RESULTWRITER_LOG_LEVEL"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = _load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.observability)
        logger.info("Starting ResultWriter v%s", __version__)

        engine = ResultWriterEngine(settings)
        engine.initialize()
        set_engine(engine)

        app.state.engine = engine

        logger.info("ResultWriter is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down ResultWriter...")
        engine.shutdown()
        set_engine(None)
        logger.info("ResultWriter shutdown complete")

    app = FastAPI(
        title="ResultWriter",
        description="Search service that renders query results through configurable response writers and templates.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/v1")
    app.state.settings = settings

    return app


def _load_settings() -> Settings:
    """Settings from ``$RESULTWRITER_CONFIG_FILE``, ``./resultwriter.yaml``, or the environment."""
    config_file = os.environ.get(CONFIG_FILE_ENV)
    yaml_path = Path(config_file) if config_file else Path("resultwriter.yaml")
    if yaml_path.exists():
        logger.info("Loading configuration from %s", yaml_path)
        settings = Settings.from_yaml(yaml_path)
    elif config_file:
        raise FileNotFoundError(f"Config file not found: {yaml_path}")
    else:
        settings = Settings()

    log_level = os.environ.get(LOG_LEVEL_ENV)
    if log_level:
        settings.observability.log_level = log_level
    return settings

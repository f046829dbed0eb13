"""Health check endpoints — Service and store health monitoring."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from resultwriter import __version__
from resultwriter.api.deps import get_engine
from resultwriter.core.engine import ResultWriterEngine
from resultwriter.store.base import StoreHealth

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="ResultWriter server version")
    service: str = Field(description="Service name ('resultwriter')")
    default_writer: str = Field(description="Writer used when 'wt' is absent")
    active_writers: list[str] = Field(description="Names of the initialized writers")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System Health Check",
    description="Returns overall system health, server version, and the initialized response writers.",
)
def health_check(
    engine: ResultWriterEngine = Depends(get_engine),
) -> HealthResponse:
    """Basic health check endpoint with writer info."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="resultwriter",
        default_writer=engine.writer_registry.default,
        active_writers=engine.writer_registry.active_writers,
    )


@router.get(
    "/health/store",
    response_model=StoreHealth,
    summary="Store Health Check",
    description="Check the result store and report its document count.",
)
def store_health(
    engine: ResultWriterEngine = Depends(get_engine),
) -> StoreHealth:
    """Check health of the result store."""
    try:
        return engine.store.health_check()
    except RuntimeError as e:
        return StoreHealth(status="unhealthy", message=str(e))

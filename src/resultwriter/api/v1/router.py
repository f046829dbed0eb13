"""API v1 Router — Select and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from resultwriter.api.v1.endpoints.health import router as health_router
from resultwriter.api.v1.endpoints.select import router as select_router

router = APIRouter(tags=["v1"])
router.include_router(select_router)
router.include_router(health_router)

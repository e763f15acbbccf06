# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Health check endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from threatlens import __version__

logger = logging.getLogger("threatlens.api.health")

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class ReadyResponse(BaseModel):
    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", service="threatlens", version=__version__)


@router.get("/ready", response_model=ReadyResponse)
async def ready() -> ReadyResponse:
    from threatlens.storage.database import get_backend

    try:
        db = await get_backend()
        await db.fetch_one("SELECT 1")
        return ReadyResponse(status="ready", database="connected")
    except Exception:
        logger.warning("Readiness check failed", exc_info=True)
        return ReadyResponse(status="not_ready", database="unavailable")

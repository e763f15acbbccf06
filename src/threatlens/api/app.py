# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from threatlens import __version__
from threatlens.api.errors import register_exception_handlers
from threatlens.api.middleware import NoCacheMiddleware, RequestMiddleware
from threatlens.api.routes import cache, campaigns, dashboard, health, indicators

logger = logging.getLogger("threatlens.api.app")

API_PREFIX = "/api/v1"

ENDPOINT_INDEX = {
    "indicators": {
        f"GET {API_PREFIX}/indicators/{{id}}": "Get detailed indicator information",
        f"GET {API_PREFIX}/indicators/search": "Search and filter indicators",
    },
    "campaigns": {
        f"GET {API_PREFIX}/campaigns/{{id}}/indicators": "Get campaign indicators with timeline",
    },
    "dashboard": {
        f"GET {API_PREFIX}/dashboard/summary": "Get dashboard summary statistics",
    },
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    from threatlens.cache.manager import get_dashboard_cache, reset_dashboard_cache
    from threatlens.core.config import get_settings
    from threatlens.core.logging import setup_logging
    from threatlens.storage.database import close_db, init_backend

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    await init_backend(db_path=settings.db_path, create_schema=settings.create_schema)
    dashboard_cache = get_dashboard_cache()
    logger.info(
        "threatlens %s serving %s (cache: %s)",
        __version__,
        settings.db_path,
        dashboard_cache.backend.backend_name,
    )

    yield

    await dashboard_cache.close()
    reset_dashboard_cache()
    await close_db()


def create_app() -> FastAPI:
    from threatlens.core.config import get_settings

    settings = get_settings()

    app = FastAPI(
        title="threatlens",
        description="Read-only query API over indicators, campaigns, and threat actors",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    register_exception_handlers(app)

    app.add_middleware(RequestMiddleware)
    app.add_middleware(NoCacheMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Cache", "X-Request-ID"],
    )

    app.include_router(health.router, prefix=API_PREFIX, tags=["health"])
    app.include_router(indicators.router, prefix=API_PREFIX, tags=["indicators"])
    app.include_router(campaigns.router, prefix=API_PREFIX, tags=["campaigns"])
    app.include_router(dashboard.router, prefix=API_PREFIX, tags=["dashboard"])
    app.include_router(cache.router, prefix=API_PREFIX, tags=["cache"])

    @app.get("/", include_in_schema=False)
    async def index() -> dict[str, object]:
        return {
            "message": "threatlens threat intelligence API",
            "version": __version__,
            "documentation": "/api/docs",
            "endpoints": ENDPOINT_INDEX,
        }

    return app

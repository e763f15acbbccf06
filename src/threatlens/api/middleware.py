# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Request middleware for logging, request IDs, error containment, and cache headers."""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger("threatlens.api.middleware")

INTERNAL_ERROR_BODY = {"error": "Internal server error"}

_NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, private",
    "Pragma": "no-cache",
    "Expires": "0",
}


class RequestMiddleware(BaseHTTPMiddleware):
    """Logs each request, tags it with ``X-Request-ID``, and contains crashes.

    Any exception that escapes the routes and the registered exception
    handlers is logged with its traceback and answered with a generic 500
    body, so internal details never reach the client.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = uuid.uuid4().hex
        start = time.monotonic()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error on %s %s (request %s)",
                request.method,
                request.url.path,
                request_id,
            )
            response = JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

        duration_ms = round((time.monotonic() - start) * 1000, 1)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )

        return response


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Forbid browser and proxy caching of API responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            response.headers.update(_NO_CACHE_HEADERS)
        return response

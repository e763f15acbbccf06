# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Map domain and framework errors to the uniform error body.

Every error response has the shape ``{error, code, details?}``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from threatlens.core.exceptions import NotFoundError, QueryError, WrongParametersError


async def _query_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, QueryError)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    details: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) or ".".join(loc) or "request"
        details[field] = str(err.get("msg", "invalid value"))
    body = WrongParametersError(details=details).to_dict()
    return JSONResponse(status_code=WrongParametersError.status_code, content=body)


async def _http_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    if exc.status_code == 404:
        body = {"error": "Endpoint not found", "code": NotFoundError.code}
    else:
        body = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QueryError, _query_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

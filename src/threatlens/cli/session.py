# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Store lifecycle and error reporting shared by CLI commands."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import typer
from pydantic import BaseModel

from threatlens.core.exceptions import QueryError, ThreatLensError
from threatlens.storage.backend import DatabaseBackend


@asynccontextmanager
async def open_store() -> AsyncIterator[DatabaseBackend]:
    """Open the configured database for the duration of one command."""
    from threatlens.core.config import get_settings
    from threatlens.storage.database import close_db, init_backend

    settings = get_settings()
    backend = await init_backend(db_path=settings.db_path, create_schema=settings.create_schema)
    try:
        yield backend
    finally:
        await close_db()


def fail(exc: ThreatLensError) -> typer.Exit:
    """Print a domain error and return the exit to raise."""
    if isinstance(exc, QueryError):
        typer.echo(f"Error: {exc.message}", err=True)
        if exc.details:
            typer.echo(json.dumps(exc.details), err=True)
    else:
        typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


def echo_json(model: BaseModel) -> None:
    typer.echo(model.model_dump_json(indent=2))

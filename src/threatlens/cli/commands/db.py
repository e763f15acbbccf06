# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Database management commands."""

from __future__ import annotations

import asyncio

import typer

from threatlens.cli.session import fail, open_store
from threatlens.core.exceptions import ThreatLensError

app = typer.Typer(no_args_is_help=True)


@app.command()
def init() -> None:
    """Create any missing tables and indexes in the configured database."""
    asyncio.run(_init_db())


async def _init_db() -> None:
    from threatlens.core.config import get_settings
    from threatlens.storage.database import close_db, init_db

    settings = get_settings()
    typer.echo(f"Initializing database at {settings.db_path}...")
    try:
        await init_db(settings.db_path, create_schema=True)
    except ThreatLensError as exc:
        raise fail(exc) from exc
    finally:
        await close_db()
    typer.echo("Schema ready.")


@app.command()
def stats() -> None:
    """Show row counts for every dataset table."""
    asyncio.run(_stats())


async def _stats() -> None:
    from rich.console import Console
    from rich.table import Table

    from threatlens.storage.schema import TABLES

    try:
        async with open_store() as db:
            counts = {}
            for table in TABLES:
                row = await db.fetch_one(f"SELECT COUNT(*) AS count FROM {table}")  # noqa: S608
                counts[table] = int(row["count"]) if row else 0
    except ThreatLensError as exc:
        raise fail(exc) from exc

    table = Table(title="Dataset")
    table.add_column("Table", style="bold")
    table.add_column("Rows", justify="right")
    for name, count in counts.items():
        table.add_row(name, str(count))
    Console().print(table)

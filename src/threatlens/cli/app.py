# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

from typing import Annotated

import typer

from threatlens.cli.commands import cache as cache_cmd
from threatlens.cli.commands import campaigns, dashboard, db, indicators

app = typer.Typer(
    name="threatlens",
    help="Query a threat-intelligence dataset (indicators, campaigns, threat actors)",
    no_args_is_help=True,
)

app.add_typer(db.app, name="db", help="Database management")
app.add_typer(indicators.app, name="indicators", help="Indicator lookup and search")
app.add_typer(campaigns.app, name="campaigns", help="Campaign timelines")
app.add_typer(dashboard.app, name="dashboard", help="Dashboard summary statistics")
app.add_typer(cache_cmd.app, name="cache", help="Manage the dashboard summary cache")


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override THREATLENS_LOG_LEVEL")
    ] = None,
) -> None:
    from threatlens.core.config import get_settings
    from threatlens.core.logging import setup_logging

    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.log_format)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Worker count"),
) -> None:
    """Start the threatlens API server."""
    import uvicorn

    from threatlens.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "threatlens.api.app:create_app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        workers=workers or settings.api_workers,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from threatlens import __version__

    typer.echo(f"threatlens v{__version__}")

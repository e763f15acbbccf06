# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""CLI command: ``threatlens dashboard summary``."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

from threatlens.cli.session import echo_json, fail, open_store
from threatlens.core.constants import DEFAULT_TIME_RANGE
from threatlens.core.exceptions import ThreatLensError

app = typer.Typer(no_args_is_help=True)


@app.command()
def summary(
    time_range: Annotated[
        str, typer.Option("--time-range", "-t", help="24h, 7d, or 30d")
    ] = str(DEFAULT_TIME_RANGE),
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw JSON document")] = False,
) -> None:
    """Show dashboard statistics computed directly from the database."""
    asyncio.run(_summary(time_range, as_json))


async def _summary(time_range: str, as_json: bool) -> None:
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table

    from threatlens.query.dashboard import DashboardService
    from threatlens.query.validation import parse_time_range

    try:
        tr = parse_time_range(time_range)
        async with open_store() as db:
            result = await DashboardService(db).get_summary(tr)
    except ThreatLensError as exc:
        raise fail(exc) from exc

    if as_json:
        echo_json(result)
        return

    console = Console()
    console.print(
        Panel(
            f"Active campaigns: [bold]{result.active_campaigns}[/bold]",
            title=f"Dashboard ({result.time_range})",
        )
    )

    types = Table(title="Indicators by Type")
    types.add_column("Type", style="bold")
    types.add_column(f"New ({result.time_range})", justify="right")
    types.add_column("Total", justify="right")
    for kind in ("ip", "domain", "url", "hash"):
        types.add_row(
            kind,
            str(getattr(result.new_indicators, kind)),
            str(getattr(result.indicator_distribution, kind)),
        )
    console.print(types)

    actors = Table(title="Top Threat Actors")
    actors.add_column("ID")
    actors.add_column("Name")
    actors.add_column("Indicators", justify="right")
    for a in result.top_threat_actors:
        actors.add_row(a.id, a.name, str(a.indicator_count))
    console.print(actors)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Campaign timeline command."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

from threatlens.cli.session import echo_json, fail, open_store
from threatlens.core.exceptions import ThreatLensError

app = typer.Typer(no_args_is_help=True)


@app.command()
def timeline(
    campaign_id: Annotated[str, typer.Argument(help="Campaign ID")],
    start_date: Annotated[str | None, typer.Option("--start-date", help="Inclusive start date")] = None,
    end_date: Annotated[str | None, typer.Option("--end-date", help="Inclusive end date")] = None,
    group_by: Annotated[str, typer.Option("--group-by", "-g", help="day or week")] = "day",
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw JSON document")] = False,
) -> None:
    """Show a campaign's indicators bucketed by day or week."""
    asyncio.run(_timeline(campaign_id, start_date, end_date, group_by, as_json))


async def _timeline(
    campaign_id: str,
    start_date: str | None,
    end_date: str | None,
    group_by: str,
    as_json: bool,
) -> None:
    from rich.console import Console
    from rich.table import Table

    from threatlens.query.campaigns import CampaignTimelineService
    from threatlens.query.validation import parse_group_by

    try:
        parse_group_by(group_by)
        async with open_store() as db:
            result = await CampaignTimelineService(db).get_timeline(
                campaign_id, start_date=start_date, end_date=end_date, group_by=group_by
            )
    except ThreatLensError as exc:
        raise fail(exc) from exc

    if as_json:
        echo_json(result)
        return

    console = Console()
    c = result.campaign
    console.print(f"[bold]{c.name}[/bold] ({c.id}) status={c.status}")
    table = Table(title=f"Timeline by {group_by}")
    table.add_column("Period")
    for kind in ("ip", "domain", "url", "hash"):
        table.add_column(kind, justify="right")
    for bucket in result.timeline:
        counts = bucket.counts
        table.add_row(
            bucket.period, str(counts.ip), str(counts.domain), str(counts.url), str(counts.hash)
        )
    console.print(table)
    s = result.summary
    console.print(
        f"total={s.total_indicators}  unique_ips={s.unique_ips}  "
        f"unique_domains={s.unique_domains}  duration_days={s.duration_days}"
    )

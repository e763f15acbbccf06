# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Indicator lookup and search commands."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

from threatlens.cli.session import echo_json, fail, open_store
from threatlens.core.constants import DEFAULT_SEARCH_LIMIT
from threatlens.core.exceptions import ThreatLensError

app = typer.Typer(no_args_is_help=True)


@app.command()
def show(
    indicator_id: Annotated[str, typer.Argument(help="Indicator ID")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw JSON document")] = False,
) -> None:
    """Show an indicator with its threat actors, campaigns, and related indicators."""
    asyncio.run(_show(indicator_id, as_json))


async def _show(indicator_id: str, as_json: bool) -> None:
    from rich.console import Console
    from rich.table import Table

    from threatlens.query.indicators import IndicatorQueryService

    try:
        async with open_store() as db:
            detail = await IndicatorQueryService(db).get_detail(indicator_id)
    except ThreatLensError as exc:
        raise fail(exc) from exc

    if as_json:
        echo_json(detail)
        return

    console = Console()
    console.print(f"[bold]{detail.id}[/bold]  {detail.type}  {detail.value}")
    console.print(
        f"confidence={detail.confidence}  first_seen={detail.first_seen}  "
        f"last_seen={detail.last_seen}  tags={', '.join(detail.tags) or '-'}"
    )

    actors = Table(title="Threat Actors")
    actors.add_column("ID")
    actors.add_column("Name")
    actors.add_column("Confidence", justify="right")
    for a in detail.threat_actors:
        actors.add_row(a.id, a.name, str(a.confidence))
    console.print(actors)

    campaigns = Table(title="Campaigns")
    campaigns.add_column("ID")
    campaigns.add_column("Name")
    campaigns.add_column("Status")
    campaigns.add_column("Last Observed")
    for c in detail.campaigns:
        campaigns.add_row(c.id, c.name, c.status, c.last_observed or "-")
    console.print(campaigns)

    related = Table(title="Related Indicators")
    related.add_column("ID")
    related.add_column("Type")
    related.add_column("Value")
    related.add_column("Relationship")
    for r in detail.related_indicators:
        related.add_row(r.id, r.type, r.value, r.relationship)
    console.print(related)


@app.command()
def search(
    type_: Annotated[str | None, typer.Option("--type", help="ip, domain, url, or hash")] = None,
    value: Annotated[str | None, typer.Option("--value", help="Substring of the value")] = None,
    threat_actor: Annotated[str | None, typer.Option("--threat-actor", help="Threat actor ID")] = None,
    campaign: Annotated[str | None, typer.Option("--campaign", help="Campaign ID")] = None,
    first_seen_after: Annotated[str | None, typer.Option("--first-seen-after")] = None,
    last_seen_before: Annotated[str | None, typer.Option("--last-seen-before")] = None,
    page: Annotated[int, typer.Option("--page", "-p")] = 1,
    limit: Annotated[int, typer.Option("--limit", "-n")] = DEFAULT_SEARCH_LIMIT,
    as_json: Annotated[bool, typer.Option("--json", help="Print the raw JSON document")] = False,
) -> None:
    """Search indicators with filters and pagination."""
    asyncio.run(
        _search(
            {
                "type": type_,
                "value": value,
                "threat_actor": threat_actor,
                "campaign": campaign,
                "first_seen_after": first_seen_after,
                "last_seen_before": last_seen_before,
            },
            page,
            limit,
            as_json,
        )
    )


async def _search(raw_filters: dict[str, str | None], page: int, limit: int, as_json: bool) -> None:
    from rich.console import Console
    from rich.table import Table

    from threatlens.query.indicators import IndicatorQueryService
    from threatlens.query.validation import build_search_filters, validate_pagination

    try:
        filters = build_search_filters(**raw_filters)
        validate_pagination(page, limit)
        async with open_store() as db:
            result = await IndicatorQueryService(db).search(filters, page=page, limit=limit)
    except ThreatLensError as exc:
        raise fail(exc) from exc

    if as_json:
        echo_json(result)
        return

    table = Table(title=f"Indicators (page {result.page}/{result.total_pages}, {result.total} total)")
    table.add_column("ID")
    table.add_column("Type")
    table.add_column("Value")
    table.add_column("Last Seen")
    table.add_column("Campaigns", justify="right")
    table.add_column("Actors", justify="right")
    for row in result.data:
        table.add_row(
            row.id,
            row.type,
            row.value,
            row.last_seen or "-",
            str(row.campaign_count),
            str(row.threat_actor_count),
        )
    Console().print(table)

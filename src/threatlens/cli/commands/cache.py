# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard cache management commands."""

from __future__ import annotations

import asyncio

import typer

from threatlens.cli.session import fail
from threatlens.core.exceptions import ThreatLensError

app = typer.Typer(no_args_is_help=True)


@app.command()
def clear() -> None:
    """Flush cached dashboard summaries."""
    asyncio.run(_async_clear())


async def _async_clear() -> None:
    from threatlens.cache.manager import get_dashboard_cache

    try:
        cache = get_dashboard_cache()
        try:
            count = await cache.clear()
        finally:
            await cache.close()
    except ThreatLensError as exc:
        raise fail(exc) from exc
    typer.echo(f"Cache cleared: {count} entries removed.")


@app.command()
def stats() -> None:
    """Show the cache backend, TTL, entry count, and hit/miss counters."""
    asyncio.run(_async_stats())


async def _async_stats() -> None:
    from rich.console import Console
    from rich.table import Table

    from threatlens.cache.manager import get_dashboard_cache

    try:
        cache = get_dashboard_cache()
        try:
            current_size = await cache.size()
        finally:
            await cache.close()
    except ThreatLensError as exc:
        raise fail(exc) from exc

    counters = cache.stats.to_dict()

    table = Table(
        title="Dashboard Cache",
        caption="Hit/miss counters cover this process only; see /api/v1/cache/stats for a server.",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Backend", cache.backend.backend_name)
    table.add_row("TTL (s)", str(cache.ttl))
    table.add_row("Entries", str(current_size))
    table.add_row("Hits", str(counters["hits"]))
    table.add_row("Misses", str(counters["misses"]))
    table.add_row("Errors", str(counters["errors"]))
    table.add_row("Hit rate", f"{counters['hit_rate']:.2%}")
    Console().print(table)

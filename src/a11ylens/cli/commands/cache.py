# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache management CLI commands."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

app = typer.Typer()


@app.command()
def clear(
    url: Annotated[
        str | None, typer.Option("--url", "-u", help="Clear only this URL")
    ] = None,
) -> None:
    """Clear cached scan results for one URL, or everything."""
    asyncio.run(_async_clear(url))


async def _async_clear(url: str | None) -> None:
    from a11ylens.cache.manager import get_scan_cache

    store = get_scan_cache()
    try:
        if url:
            existed = await store.clear_one(url)
            state = "cleared" if existed else "was not cached"
            typer.echo(f"Cache for {url} {state}.")
            return
        count = await store.clear_all()
        typer.echo(f"Cache cleared: {count} entries removed.")
    finally:
        await store.close()


@app.command()
def stats() -> None:
    """Show aggregate violation counts and per-URL detail."""
    asyncio.run(_async_stats())


async def _async_stats() -> None:
    from rich.console import Console
    from rich.table import Table

    from a11ylens.cache.manager import get_scan_cache

    store = get_scan_cache()
    try:
        aggregate = await store.get_stats()
        detailed = await store.detailed_stats()
        daily = await store.daily_scan_counts()
    finally:
        await store.close()

    console = Console()
    table = Table(title="Aggregate Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for key, value in aggregate.summary().items():
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print(table)

    if detailed:
        per_url = Table(title="Cached Pages")
        per_url.add_column("URL", style="cyan")
        per_url.add_column("Total", justify="right")
        per_url.add_column("Critical", justify="right", style="red")
        per_url.add_column("Serious", justify="right", style="yellow")
        per_url.add_column("Moderate", justify="right")
        per_url.add_column("Minor", justify="right", style="dim")
        for url, snapshot in detailed.items():
            c = snapshot.violation_counts
            per_url.add_row(
                url, str(c.total), str(c.critical), str(c.serious), str(c.moderate), str(c.minor)
            )
        console.print(per_url)

    if daily:
        days = Table(title="Scans Per Day")
        days.add_column("Date")
        days.add_column("Scans", justify="right")
        for day, count in daily.items():
            days.add_row(day, str(count))
        console.print(days)


@app.command()
def show(
    url: Annotated[str, typer.Argument(help="Page URL to look up")],
) -> None:
    """Show the cached snapshot for a URL."""
    asyncio.run(_async_show(url))


async def _async_show(url: str) -> None:
    from rich.console import Console
    from rich.table import Table

    from a11ylens.cache.manager import get_scan_cache

    store = get_scan_cache()
    try:
        snapshot = await store.get(url)
    finally:
        await store.close()

    if snapshot is None:
        typer.echo(f"No cached results for {url}")
        raise typer.Exit(1)

    console = Console()
    c = snapshot.violation_counts
    console.print(f"[bold]{snapshot.url}[/bold]  scanned at {snapshot.scan_timestamp}")
    console.print(
        f"{c.total} violations: {c.critical} critical, {c.serious} serious, "
        f"{c.moderate} moderate, {c.minor} minor"
    )

    table = Table()
    table.add_column("Rule", style="cyan")
    table.add_column("Impact")
    table.add_column("Nodes", justify="right")
    table.add_column("Description")
    for v in snapshot.violations:
        table.add_row(v.rule_id, str(v.impact), str(v.node_count), v.description)
    console.print(table)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Statistics CLI commands."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

app = typer.Typer()


@app.command()
def summary(
    timeframe: Annotated[
        str, typer.Option("--timeframe", "-t", help="Days back, or 'custom'")
    ] = "30",
    view_by: Annotated[
        str | None, typer.Option("--view-by", help="'day' or 'week' for custom")
    ] = None,
    date: Annotated[str | None, typer.Option("--date", help="Day for --view-by day")] = None,
    start_date: Annotated[str | None, typer.Option("--start-date")] = None,
    end_date: Annotated[str | None, typer.Option("--end-date")] = None,
) -> None:
    """Show summary counts and top issues from the violation log."""
    asyncio.run(_async_summary(timeframe, view_by, date, start_date, end_date))


async def _async_summary(
    timeframe: str,
    view_by: str | None,
    date: str | None,
    start_date: str | None,
    end_date: str | None,
) -> None:
    from rich.console import Console
    from rich.table import Table

    from a11ylens.analytics.statistics import StatisticsEngine
    from a11ylens.analytics.timeframe import resolve_timeframe
    from a11ylens.core.config import get_settings
    from a11ylens.core.exceptions import TimeframeError
    from a11ylens.storage.database import close_db, init_db

    settings = get_settings()
    try:
        window = resolve_timeframe(
            timeframe,
            view_by,
            date,
            start_date,
            end_date,
            tz=settings.tzinfo,
            max_week_span_days=settings.max_week_span_days,
            default_days=settings.default_timeframe_days,
        )
    except TimeframeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc

    if window is None:
        typer.echo("No data: the timeframe is incomplete or could not be parsed.")
        return

    db = await init_db(settings.db_path)
    try:
        engine = StatisticsEngine(db, tz=settings.tzinfo, top_limit=settings.top_issues_limit)
        payload = await engine.query(window)
        recent = await engine.recent_scan_counts()
    finally:
        await close_db()

    console = Console()
    console.print(
        f"[bold]{window.start:%Y-%m-%d %H:%M}[/bold] to "
        f"[bold]{window.end:%Y-%m-%d %H:%M}[/bold] ({window.granularity})"
    )

    table = Table(title="Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for key, value in payload["summary"].items():
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print(table)

    if payload["top_issues"]:
        top = Table(title="Top Issues")
        top.add_column("#", justify="right")
        top.add_column("Description")
        top.add_column("Count", justify="right")
        for i, issue in enumerate(payload["top_issues"], 1):
            top.add_row(str(i), issue["description"], str(issue["issue_count"]))
        console.print(top)

    scans = Table(title="Scans (last 7 days)")
    scans.add_column("Day")
    scans.add_column("Scans", justify="right")
    for point in recent:
        scans.add_row(point["label"], str(point["count"]))
    console.print(scans)

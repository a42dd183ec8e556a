# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

from a11ylens.cli.commands import cache as cache_cmd
from a11ylens.cli.commands import db
from a11ylens.cli.commands import stats as stats_cmd

app = typer.Typer(
    name="a11ylens",
    help="Accessibility scan caching and statistics service",
    no_args_is_help=True,
)

app.add_typer(db.app, name="db", help="Database management")
app.add_typer(cache_cmd.app, name="cache", help="Manage cached scan results")
app.add_typer(stats_cmd.app, name="stats", help="Violation statistics")


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override the configured log level")
    ] = None,
) -> None:
    from a11ylens.core.config import get_settings
    from a11ylens.core.logging import setup_logging

    settings = get_settings()
    setup_logging(log_level or settings.log_level, "text")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Worker count"),
) -> None:
    """Start the a11ylens API server."""
    import uvicorn

    from a11ylens.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "a11ylens.api.app:create_app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        workers=workers or settings.api_workers,
        factory=True,
    )


@app.command()
def seed(
    history_days: Annotated[
        int, typer.Option("--history-days", help="Days of randomized past scans to log")
    ] = 7,
    random_seed: Annotated[
        int | None, typer.Option("--random-seed", help="Seed for reproducible history")
    ] = None,
) -> None:
    """Populate the cache and violation log with sample scans."""
    asyncio.run(_async_seed(history_days, random_seed))


async def _async_seed(history_days: int, random_seed: int | None) -> None:
    import random

    from a11ylens.cache.manager import get_scan_cache
    from a11ylens.core.config import get_settings
    from a11ylens.seed import seed_history, seed_sample_scans
    from a11ylens.storage.database import close_db, init_db

    settings = get_settings()
    db = await init_db(settings.db_path)
    store = get_scan_cache()
    try:
        pages = await seed_sample_scans(store, db, settings.site_base_url)
        rows = 0
        if history_days > 0:
            rows = await seed_history(
                db,
                settings.site_base_url,
                days=history_days,
                rng=random.Random(random_seed),
            )
    finally:
        await store.close()
        await close_db()

    typer.echo(f"Seeded {pages} sample pages and {rows} historical violation rows.")


@app.command()
def version() -> None:
    """Show version information."""
    from a11ylens import __version__

    typer.echo(f"a11ylens v{__version__}")

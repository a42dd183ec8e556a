# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Database management commands."""

from __future__ import annotations

import asyncio

import typer

app = typer.Typer()


@app.command()
def init() -> None:
    """Initialize the SQLite database with the current schema."""
    asyncio.run(_init_db())


async def _init_db() -> None:
    from a11ylens.core.config import get_settings
    from a11ylens.storage.database import close_db, init_db

    settings = get_settings()
    typer.echo(f"Initializing database at {settings.db_path}...")
    await init_db(settings.db_path)
    await close_db()
    typer.echo("Database initialized.")


@app.command()
def migrate() -> None:
    """Apply pending database migrations.

    Shows the current schema version and any pending migrations,
    then applies them in order.
    """
    asyncio.run(_migrate_db())


async def _migrate_db() -> None:
    from a11ylens.core.config import get_settings
    from a11ylens.storage.database import close_db, init_db
    from a11ylens.storage.migrations import (
        get_current_version,
        get_pending_migrations,
        run_migrations,
    )

    settings = get_settings()
    # Initialize without auto-migrate so we can show status first
    db = await init_db(settings.db_path, auto_migrate=False)

    try:
        current = await get_current_version(db)
        pending = await get_pending_migrations(db)

        typer.echo(f"Database: {settings.db_path}")
        typer.echo(f"Current schema version: {current}")

        if not pending:
            typer.echo("No pending migrations.")
            return

        typer.echo(f"Pending migrations: {len(pending)}")
        for m in pending:
            typer.echo(f"  {m.version:03d}: {m.name}")

        typer.echo()
        applied = await run_migrations(db)

        for m in applied:
            typer.echo(f"Applied migration {m.version:03d}: {m.name}")

        new_version = await get_current_version(db)
        typer.echo(f"\nSchema version is now: {new_version}")
    finally:
        await close_db()


@app.command()
def stats() -> None:
    """Show row counts for the violation log and report summaries."""
    asyncio.run(_show_stats())


async def _show_stats() -> None:
    from a11ylens.core.config import get_settings
    from a11ylens.storage.database import close_db, init_db

    settings = get_settings()
    db = await init_db(settings.db_path)

    tables = ["accessibility_violations", "accessibility_reports"]
    typer.echo(f"Database: {settings.db_path}")
    typer.echo()
    try:
        for table in tables:
            cursor = await db.execute(f"SELECT COUNT(*) FROM {table}")  # noqa: S608
            row = await cursor.fetchone()
            count = row[0] if row else 0
            typer.echo(f"  {table}: {count} rows")
    finally:
        await close_db()

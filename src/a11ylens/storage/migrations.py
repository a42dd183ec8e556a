# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Versioned database migrations for the a11ylens database.

Applied versions are tracked in a ``schema_migrations`` table.  Each
migration is idempotent and committed on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Migration registry infrastructure
# ---------------------------------------------------------------------------

MigrationFunc = Callable[[aiosqlite.Connection], Coroutine[Any, Any, None]]


@dataclass(frozen=True, slots=True)
class Migration:
    """A single database migration."""

    version: int
    name: str
    func: MigrationFunc


# Ordered list of all migrations.  New migrations are appended here.
_MIGRATIONS: list[Migration] = []


def _register(version: int, name: str) -> Callable[[MigrationFunc], MigrationFunc]:
    """Decorator that registers a migration function."""

    def decorator(fn: MigrationFunc) -> MigrationFunc:
        _MIGRATIONS.append(Migration(version=version, name=name, func=fn))
        return fn

    return decorator


# ---------------------------------------------------------------------------
# Schema-migrations bookkeeping table
# ---------------------------------------------------------------------------

_CREATE_SCHEMA_MIGRATIONS = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


async def _ensure_migrations_table(db: aiosqlite.Connection) -> None:
    """Create the ``schema_migrations`` table if it does not exist."""
    await db.execute(_CREATE_SCHEMA_MIGRATIONS)
    await db.commit()


async def get_current_version(db: aiosqlite.Connection) -> int:
    """Return the highest applied migration version, or 0 if none."""
    await _ensure_migrations_table(db)
    cursor = await db.execute(
        "SELECT COALESCE(MAX(version), 0) FROM schema_migrations"
    )
    row = await cursor.fetchone()
    return int(row[0]) if row else 0


async def get_pending_migrations(db: aiosqlite.Connection) -> list[Migration]:
    """Return migrations that have not yet been applied."""
    current = await get_current_version(db)
    return [m for m in _MIGRATIONS if m.version > current]


async def run_migrations(db: aiosqlite.Connection) -> list[Migration]:
    """Run all pending migrations in order and return those applied."""
    await _ensure_migrations_table(db)

    current = await get_current_version(db)
    applied: list[Migration] = []

    for migration in _MIGRATIONS:
        if migration.version <= current:
            continue

        logger.info(
            "Applying migration %03d: %s", migration.version, migration.name
        )
        await migration.func(db)

        await db.execute(
            "INSERT OR IGNORE INTO schema_migrations (version, name) VALUES (?, ?)",
            (migration.version, migration.name),
        )
        await db.commit()

        applied.append(migration)
        logger.info("Migration %03d applied successfully.", migration.version)

    return applied


# =========================================================================
# Migration 001 -- violation log and per-URL report summaries
# =========================================================================

_CREATE_VIOLATIONS = """
CREATE TABLE IF NOT EXISTS accessibility_violations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL,
    rule_id TEXT NOT NULL DEFAULT '',
    impact TEXT NOT NULL,
    impact_weight INTEGER NOT NULL DEFAULT 4,
    description TEXT NOT NULL DEFAULT '',
    help TEXT,
    help_url TEXT,
    tags TEXT DEFAULT '[]',
    nodes_count INTEGER NOT NULL DEFAULT 0,
    nodes_data TEXT,
    scanned_url TEXT NOT NULL,
    nodes TEXT NOT NULL DEFAULT '[]',
    timestamp INTEGER NOT NULL
);
"""

_CREATE_REPORTS = """
CREATE TABLE IF NOT EXISTS accessibility_reports (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL UNIQUE,
    title TEXT,
    violation_count INTEGER NOT NULL DEFAULT 0,
    critical_count INTEGER NOT NULL DEFAULT 0,
    serious_count INTEGER NOT NULL DEFAULT 0,
    moderate_count INTEGER NOT NULL DEFAULT 0,
    minor_count INTEGER NOT NULL DEFAULT 0,
    last_scanned INTEGER NOT NULL
);
"""

_INDEXES_001 = [
    "CREATE INDEX IF NOT EXISTS idx_violations_url ON accessibility_violations(url);",
    "CREATE INDEX IF NOT EXISTS idx_violations_impact_weight "
    "ON accessibility_violations(impact_weight);",
    "CREATE INDEX IF NOT EXISTS idx_violations_timestamp_impact "
    "ON accessibility_violations(timestamp, impact);",
    "CREATE INDEX IF NOT EXISTS idx_violations_timestamp_description "
    "ON accessibility_violations(timestamp, description);",
    "CREATE INDEX IF NOT EXISTS idx_reports_last_scanned ON accessibility_reports(last_scanned);",
    "CREATE INDEX IF NOT EXISTS idx_reports_violation_count "
    "ON accessibility_reports(violation_count);",
]


@_register(1, "initial_schema")
async def _migration_001(db: aiosqlite.Connection) -> None:
    await db.execute(_CREATE_VIOLATIONS)
    await db.execute(_CREATE_REPORTS)
    for stmt in _INDEXES_001:
        await db.execute(stmt)

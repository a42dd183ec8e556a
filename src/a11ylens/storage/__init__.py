# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Storage layer -- SQLite connection, migrations, and repositories."""

from a11ylens.storage.database import close_db, get_db, init_db
from a11ylens.storage.migrations import run_migrations
from a11ylens.storage.persist import persist_scan
from a11ylens.storage.repositories.reports import ReportRepository
from a11ylens.storage.repositories.violations import ViolationLogRepository

__all__ = [
    "ReportRepository",
    "ViolationLogRepository",
    "close_db",
    "get_db",
    "init_db",
    "persist_scan",
    "run_migrations",
]

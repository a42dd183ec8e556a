# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository modules for database access."""

from a11ylens.storage.repositories.reports import ReportRepository
from a11ylens.storage.repositories.violations import ViolationLogRepository

__all__ = [
    "ReportRepository",
    "ViolationLogRepository",
]

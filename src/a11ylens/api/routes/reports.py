# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Report endpoints: stored page summaries and slug lookups."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from a11ylens.cache.manager import get_scan_cache
from a11ylens.cache.store import ScanCacheStore
from a11ylens.core.config import get_settings
from a11ylens.matching.slug import SlugMatcher

logger = logging.getLogger("a11ylens.api.reports")

router = APIRouter()


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ReportListItem(BaseModel):
    url: str
    title: str | None
    violation_count: int
    critical_count: int
    serious_count: int
    moderate_count: int
    minor_count: int
    last_scanned: int


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/reports", response_model=list[ReportListItem])
async def list_reports(
    limit: int = Query(default=50, ge=1, le=500),
) -> list[ReportListItem]:
    """Per-page summaries, most recently scanned first."""
    from a11ylens.storage.database import get_db
    from a11ylens.storage.repositories.reports import ReportRepository

    db = await get_db()
    rows = await ReportRepository(db).list_recent(limit=limit)
    return [ReportListItem(**{k: row[k] for k in ReportListItem.model_fields}) for row in rows]


@router.get("/reports/{slug:path}")
async def report_for_slug(
    slug: str,
    store: ScanCacheStore = Depends(get_scan_cache),
) -> dict[str, Any]:
    """Resolve *slug* to a scanned page; unknown slugs get a zeroed report."""
    matcher = SlugMatcher(store, get_settings().site_base_url)
    result = await matcher.match(slug)
    snapshot = result.snapshot
    return {
        "success": True,
        "found": result.found,
        "strategy": str(result.strategy),
        "matched_url": result.matched_url,
        "url": snapshot.url,
        "scan_timestamp": snapshot.scan_timestamp,
        "violation_counts": snapshot.violation_counts.model_dump(),
        "violations": [v.model_dump(mode="json") for v in snapshot.violations],
    }

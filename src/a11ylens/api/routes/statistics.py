# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Dashboard statistics endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from a11ylens.analytics.statistics import StatisticsEngine
from a11ylens.analytics.timeframe import resolve_timeframe
from a11ylens.cache.manager import get_scan_cache
from a11ylens.cache.store import ScanCacheStore
from a11ylens.core.config import get_settings
from a11ylens.core.exceptions import TimeframeError

logger = logging.getLogger("a11ylens.api.statistics")

router = APIRouter()


async def _engine() -> StatisticsEngine:
    from a11ylens.storage.database import get_db

    settings = get_settings()
    db = await get_db()
    return StatisticsEngine(db, tz=settings.tzinfo, top_limit=settings.top_issues_limit)


@router.get("/statistics")
async def statistics(
    timeframe: str | None = Query(default=None, description="Days back, or 'custom'"),
    view_by: str | None = Query(default=None, description="'day' or 'week' for custom"),
    date: str | None = Query(default=None, description="Day for view_by=day"),
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
) -> dict[str, Any]:
    """Summary cards, zero-filled chart series and top issues."""
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
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if window is None:
        logger.debug("Incomplete statistics request; returning empty payload")
        return StatisticsEngine.empty_payload()

    engine = await _engine()
    return await engine.query(window)


@router.get("/statistics/overview")
async def overview(
    store: ScanCacheStore = Depends(get_scan_cache),
) -> dict[str, Any]:
    """Cached aggregate totals plus scans per day over the last week."""
    stats = await store.get_stats()
    engine = await _engine()
    return {
        "success": True,
        "aggregate": stats.summary(),
        "recent_scans": await engine.recent_scan_counts(),
    }

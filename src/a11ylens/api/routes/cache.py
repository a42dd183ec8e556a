# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache management API endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from a11ylens.cache.manager import get_scan_cache
from a11ylens.cache.store import ScanCacheStore
from a11ylens.core.exceptions import CacheError

logger = logging.getLogger("a11ylens.api.cache")

router = APIRouter()


class CacheClearRequest(BaseModel):
    url: str | None = None


class CacheClearResponse(BaseModel):
    success: bool
    cleared: int
    message: str


def _unavailable(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"success": False, "message": message})


@router.post("/cache/clear", response_model=CacheClearResponse)
async def clear_cache(
    body: CacheClearRequest | None = None,
    store: ScanCacheStore = Depends(get_scan_cache),
) -> Any:
    """Clear one URL's snapshot, or everything when no URL is given."""
    try:
        if body is not None and body.url:
            existed = await store.clear_one(body.url)
            return CacheClearResponse(
                success=True,
                cleared=int(existed),
                message=f"Cache cleared for URL: {body.url}",
            )
        count = await store.clear_all()
    except CacheError as exc:
        logger.error("Cache clear failed: %s", exc)
        return _unavailable("Failed to clear cache")
    return CacheClearResponse(success=True, cleared=count, message="All cache cleared")


@router.get("/cache/result")
async def cached_result(
    url: str = Query(min_length=1),
    store: ScanCacheStore = Depends(get_scan_cache),
) -> Any:
    """The cached snapshot for *url*."""
    try:
        snapshot = await store.get(url)
    except CacheError as exc:
        logger.error("Cache lookup failed for %s: %s", url, exc)
        return _unavailable("Failed to read cached results")
    if snapshot is None:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": "No cached results found for this URL"},
        )
    return {"success": True, "data": snapshot.model_dump(mode="json")}


@router.get("/cache/stats")
async def cache_stats(
    store: ScanCacheStore = Depends(get_scan_cache),
) -> Any:
    """Aggregate, per-URL detail, trigger URLs and daily scan counts."""
    try:
        stats = await store.get_stats()
        detailed = await store.detailed_stats()
        trigger_urls = await store.trigger_urls()
        daily_counts = await store.daily_scan_counts()
    except CacheError as exc:
        logger.error("Cache stats failed: %s", exc)
        return _unavailable("Failed to read cache statistics")
    return {
        "success": True,
        "aggregate": stats.summary(),
        "detailed": {
            url: {
                "scan_timestamp": snapshot.scan_timestamp,
                "violation_counts": snapshot.violation_counts.model_dump(),
            }
            for url, snapshot in detailed.items()
        },
        "trigger_urls": trigger_urls,
        "daily_scan_counts": daily_counts,
    }

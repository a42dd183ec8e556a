# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan submission endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from a11ylens.cache.manager import get_scan_cache
from a11ylens.cache.store import ScanCacheStore
from a11ylens.core.exceptions import StorageError
from a11ylens.models.submission import ScanSubmission

logger = logging.getLogger("a11ylens.api.scans")

router = APIRouter()


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------


class TriggerRequestBody(BaseModel):
    url: str = Field(min_length=1)


class TriggerResponse(BaseModel):
    success: bool
    url: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/scans")
async def submit_scan(
    request: Request,
    store: ScanCacheStore = Depends(get_scan_cache),
) -> Any:
    """Accept one page's violations from the browser scanner.

    The cache snapshot is replaced, then the durable log rows for the URL
    are rewritten.  Responds with the refreshed aggregate totals.
    """
    try:
        submission = ScanSubmission.model_validate_json(await request.body())
    except ValidationError as exc:
        logger.warning("Rejected scan submission: %d validation errors", exc.error_count())
        return _error(400, "Invalid data: url and violations are required")

    scanned_at = int(submission.timestamp.timestamp()) if submission.timestamp else None
    snapshot = await store.write_scan(submission.url, submission, scanned_at=scanned_at)
    if snapshot is None:
        return _error(500, "Failed to save scan results")

    from a11ylens.storage.database import get_db
    from a11ylens.storage.persist import persist_scan

    try:
        db = await get_db()
        await persist_scan(
            db,
            snapshot.url,
            submission.violations,
            snapshot.violation_counts,
            snapshot.scan_timestamp,
            title=submission.title,
        )
    except StorageError:
        logger.exception(
            "Failed to log scan for %s (%d violations)",
            snapshot.url,
            len(submission.violations),
        )
        return _error(500, "Failed to save scan results")

    stats = await store.get_stats()
    return {
        "success": True,
        "url": snapshot.url,
        "violation_counts": snapshot.violation_counts.model_dump(),
        "summary": stats.summary(),
    }


@router.post("/scans/trigger", response_model=TriggerResponse)
async def record_trigger(
    body: TriggerRequestBody,
    store: ScanCacheStore = Depends(get_scan_cache),
) -> TriggerResponse:
    """Remember a page that exposes the scan-trigger control."""
    normalized = await store.record_trigger(body.url)
    return TriggerResponse(success=True, url=normalized)

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Liveness and readiness endpoints.

``/ready`` reports ready only when the violation log database answers and
every registered schema migration has been applied.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from a11ylens import __version__

logger = logging.getLogger("a11ylens.api.health")

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class ReadyResponse(BaseModel):
    status: str
    database: str
    schema_version: int | None = None
    pending_migrations: int = 0


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", service="a11ylens", version=__version__)


@router.get("/ready", response_model=ReadyResponse)
async def ready() -> ReadyResponse:
    from a11ylens.storage.database import get_db
    from a11ylens.storage.migrations import get_current_version, get_pending_migrations

    try:
        db = await get_db()
        version = await get_current_version(db)
        pending = await get_pending_migrations(db)
    except Exception:
        logger.exception("Readiness check failed")
        return ReadyResponse(status="not_ready", database="unavailable")

    if pending:
        logger.warning("Readiness check: %d migrations pending", len(pending))
        return ReadyResponse(
            status="not_ready",
            database="connected",
            schema_version=version,
            pending_migrations=len(pending),
        )
    return ReadyResponse(status="ready", database="connected", schema_version=version)

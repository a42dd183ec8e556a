# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from a11ylens import __version__
from a11ylens.api.middleware import RequestMiddleware
from a11ylens.api.routes import cache, health, reports, scans, statistics


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    from a11ylens.cache.manager import get_scan_cache, reset_scan_cache
    from a11ylens.core.config import get_settings
    from a11ylens.core.logging import setup_logging
    from a11ylens.storage.database import close_db, init_db

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    await init_db(settings.db_path, auto_migrate=settings.auto_migrate)

    yield

    await get_scan_cache().close()
    reset_scan_cache()
    await close_db()


def create_app() -> FastAPI:
    from a11ylens.core.config import get_settings

    settings = get_settings()

    app = FastAPI(
        title="a11ylens",
        description="Accessibility scan caching and statistics service",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(scans.router, prefix="/api/v1", tags=["scans"])
    app.include_router(statistics.router, prefix="/api/v1", tags=["statistics"])
    app.include_router(cache.router, prefix="/api/v1", tags=["cache"])
    app.include_router(reports.router, prefix="/api/v1", tags=["reports"])
    app.add_middleware(RequestMiddleware)

    return app

# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from a11ylens.cache.memory import MemoryCacheBackend
from a11ylens.cache.store import ScanCacheStore
from tests.helpers import NOON_2024_05_01, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOON_2024_05_01)


@pytest.fixture
def store(clock: FakeClock) -> ScanCacheStore:
    return ScanCacheStore(MemoryCacheBackend(), clock=clock)


@pytest.fixture
async def db(tmp_path):
    """An initialized, migrated database in a temporary directory."""
    from a11ylens.storage.database import close_db, init_db

    conn = await init_db(tmp_path / "test.db")
    try:
        yield conn
    finally:
        await close_db()


@pytest.fixture(autouse=True)
def _clear_cache():
    """Reset the scan cache singleton between tests."""
    from a11ylens.cache.manager import reset_scan_cache

    reset_scan_cache()
    yield
    reset_scan_cache()


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch, tmp_path):
    """Keep tests away from a developer's .env and working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("A11YLENS_DB_PATH", str(tmp_path / "a11ylens.db"))
    monkeypatch.setenv("A11YLENS_CACHE_BACKEND", "memory")
    monkeypatch.setenv("A11YLENS_TIMEZONE", "UTC")

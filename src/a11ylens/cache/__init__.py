# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan result cache: snapshots, URL registries and aggregates."""

from a11ylens.cache.manager import get_scan_cache, reset_scan_cache
from a11ylens.cache.store import ScanCacheStore
from a11ylens.cache.urls import normalize_url

__all__ = ["ScanCacheStore", "get_scan_cache", "normalize_url", "reset_scan_cache"]

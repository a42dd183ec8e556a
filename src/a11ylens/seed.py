# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Sample scan data for demos and local dashboards."""

from __future__ import annotations

import logging
import random
import time
from typing import Any

import aiosqlite

from a11ylens.cache.store import ScanCacheStore
from a11ylens.cache.urls import normalize_url
from a11ylens.models.violation import RawViolation
from a11ylens.storage.persist import persist_scan
from a11ylens.storage.repositories.violations import ViolationLogRepository

logger = logging.getLogger("a11ylens.seed")


def _violation(
    rule_id: str,
    impact: str,
    description: str,
    help_text: str,
    tags: list[str],
    nodes: int,
) -> dict[str, Any]:
    return {
        "id": rule_id,
        "impact": impact,
        "description": description,
        "help": help_text,
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.8/{rule_id}",
        "tags": tags,
        "nodes": [{} for _ in range(nodes)],
    }


SAMPLE_PAGES: dict[str, list[dict[str, Any]]] = {
    "/home": [
        _violation(
            "color-contrast", "serious",
            "Elements must have sufficient color contrast",
            "Ensure all text elements have sufficient color contrast",
            ["cat.color", "wcag2aa", "wcag143"], 3,
        ),
        _violation(
            "aria-label", "critical",
            "Elements with ARIA labels must have valid text",
            "Ensure ARIA labels are meaningful",
            ["cat.aria", "wcag2a"], 2,
        ),
        _violation(
            "heading-order", "moderate",
            "Heading levels should only increase by one",
            "Ensure headings follow a logical order",
            ["cat.semantics", "wcag2a"], 1,
        ),
    ],
    "/about": [
        _violation(
            "image-alt", "critical",
            "Images must have alternative text",
            "Ensure all images have alt text",
            ["cat.text-alternatives", "wcag2a"], 4,
        ),
        _violation(
            "label", "serious",
            "Form elements must have labels",
            "Ensure all form elements have proper labels",
            ["cat.forms", "wcag2a"], 2,
        ),
        _violation(
            "link-name", "minor",
            "Links must have discernible text",
            "Ensure links have meaningful text",
            ["cat.name-role-value", "wcag2a"], 3,
        ),
    ],
    "/contact": [
        _violation(
            "keyboard", "serious",
            "Elements must be keyboard accessible",
            "Ensure interactive elements are reachable by keyboard",
            ["cat.keyboard", "wcag2a"], 2,
        ),
        _violation(
            "region", "moderate",
            "All page content should be contained by landmarks",
            "Ensure content is contained in landmarks",
            ["cat.keyboard", "best-practice"], 5,
        ),
    ],
}

HISTORY_PATHS = ("/", "/accessibility/test-violations", "/node/1")

HISTORY_TEMPLATES: tuple[dict[str, Any], ...] = (
    _violation("image-alt", "critical", "Images must have alternate text",
               "Ensure all images have alt text", ["wcag2a"], 1),
    _violation("color-contrast", "serious", "Elements must have sufficient color contrast",
               "Ensure sufficient color contrast", ["wcag2aa"], 1),
    _violation("landmark-one-main", "moderate", "Page must have a main landmark",
               "Ensure the page has a main landmark", ["best-practice"], 1),
)


async def seed_sample_scans(
    store: ScanCacheStore,
    db: aiosqlite.Connection,
    base_url: str,
) -> int:
    """Cache and log one scan for each sample page.  Returns pages seeded."""
    seeded = 0
    for path, raw in SAMPLE_PAGES.items():
        url = normalize_url(base_url.rstrip("/") + path)
        violations = [RawViolation.model_validate(v) for v in raw]
        scanned_at = int(time.time())
        snapshot = await store.write_scan(url, {"violations": raw}, scanned_at=scanned_at)
        if snapshot is None:
            logger.warning("Skipping sample page %s: cache write failed", url)
            continue
        await persist_scan(
            db,
            url,
            violations,
            snapshot.violation_counts,
            scanned_at,
            title=path.strip("/").title(),
        )
        seeded += 1
    logger.info("Seeded %d sample pages", seeded)
    return seeded


async def seed_history(
    db: aiosqlite.Connection,
    base_url: str,
    *,
    days: int = 7,
    rng: random.Random | None = None,
    now: float | None = None,
) -> int:
    """Append randomized past scans to the durable log.  Returns rows added.

    Each of the last *days* days gets zero to three scans between 08:00 and
    20:00 offsets, each with two or three violations sharing one timestamp.
    """
    rng = rng or random.Random()
    now = time.time() if now is None else now
    repo = ViolationLogRepository(db)
    urls = [normalize_url(base_url.rstrip("/") + path) for path in HISTORY_PATHS]

    added = 0
    for back in range(days - 1, -1, -1):
        for _ in range(rng.randint(0, 3)):
            timestamp = int(now - back * 86400) + rng.randint(3600 * 8, 3600 * 20)
            timestamp = min(timestamp, int(now))
            url = rng.choice(urls)
            picked = [
                RawViolation.model_validate(rng.choice(HISTORY_TEMPLATES))
                for _ in range(rng.randint(2, 3))
            ]
            added += await repo.append(url, picked, timestamp, commit=False)
    await db.commit()
    logger.info("Seeded %d historical violation rows", added)
    return added

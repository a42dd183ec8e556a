# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for per-URL report summaries."""

from __future__ import annotations

from typing import Any

import aiosqlite

from a11ylens.models.snapshot import ImpactCounts


class ReportRepository:
    """CRUD operations for the accessibility_reports table."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def upsert(
        self,
        url: str,
        counts: ImpactCounts,
        last_scanned: int,
        *,
        title: str | None = None,
        commit: bool = True,
    ) -> None:
        """Insert or replace the summary row for *url*."""
        await self._db.execute(
            """
            INSERT INTO accessibility_reports (
                url, title, violation_count, critical_count, serious_count,
                moderate_count, minor_count, last_scanned
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(url) DO UPDATE SET
                title = COALESCE(excluded.title, accessibility_reports.title),
                violation_count = excluded.violation_count,
                critical_count = excluded.critical_count,
                serious_count = excluded.serious_count,
                moderate_count = excluded.moderate_count,
                minor_count = excluded.minor_count,
                last_scanned = excluded.last_scanned
            """,
            (
                url,
                title,
                counts.total,
                counts.critical,
                counts.serious,
                counts.moderate,
                counts.minor,
                last_scanned,
            ),
        )
        if commit:
            await self._db.commit()

    async def get(self, url: str) -> dict[str, Any] | None:
        cursor = await self._db.execute(
            "SELECT * FROM accessibility_reports WHERE url = ?", (url,)
        )
        row = await cursor.fetchone()
        return dict(row) if row is not None else None

    async def list_recent(self, limit: int = 50) -> list[dict[str, Any]]:
        """List summaries, most recently scanned first."""
        cursor = await self._db.execute(
            "SELECT * FROM accessibility_reports "
            "ORDER BY last_scanned DESC, id DESC LIMIT ?",
            (limit,),
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def delete(self, url: str) -> bool:
        cursor = await self._db.execute(
            "DELETE FROM accessibility_reports WHERE url = ?", (url,)
        )
        await self._db.commit()
        return cursor.rowcount > 0

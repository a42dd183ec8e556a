# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository for the durable accessibility violation log."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import aiosqlite

from a11ylens.core.constants import IMPACT_WEIGHTS, Impact
from a11ylens.models.violation import RawViolation, ViolationRecord


class ViolationLogRepository:
    """One row per violation per scan, replaced wholesale on every rescan.

    Time-range queries take inclusive epoch-second bounds.  Bucketing into
    hours or days is left to the caller so the configured timezone applies.
    """

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def replace_for_url(
        self,
        url: str,
        violations: Sequence[RawViolation],
        timestamp: int,
        *,
        commit: bool = True,
    ) -> int:
        """Delete every row for *url* and insert one row per violation.

        Pass ``commit=False`` to fold the write into a larger transaction.
        Returns the number of rows inserted.
        """
        await self._db.execute(
            "DELETE FROM accessibility_violations WHERE url = ?", (url,)
        )
        return await self.append(url, violations, timestamp, commit=commit)

    async def append(
        self,
        url: str,
        violations: Sequence[RawViolation],
        timestamp: int,
        *,
        commit: bool = True,
    ) -> int:
        """Insert one row per violation without touching earlier scans."""
        rows = [self._to_row(url, raw, timestamp) for raw in violations]
        if rows:
            await self._db.executemany(
                """
                INSERT INTO accessibility_violations (
                    url, rule_id, impact, impact_weight, description, help,
                    help_url, tags, nodes_count, nodes_data, scanned_url,
                    nodes, timestamp
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
        if commit:
            await self._db.commit()
        return len(rows)

    async def list_for_url(self, url: str) -> list[dict[str, Any]]:
        """Rows for *url*, most severe first."""
        cursor = await self._db.execute(
            "SELECT * FROM accessibility_violations WHERE url = ? "
            "ORDER BY impact_weight ASC, id ASC",
            (url,),
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def counts_by_timestamp(self, start: int, end: int) -> dict[int, int]:
        """Violation rows per scan timestamp within ``[start, end]``."""
        cursor = await self._db.execute(
            "SELECT timestamp, COUNT(id) AS n FROM accessibility_violations "
            "WHERE timestamp BETWEEN ? AND ? GROUP BY timestamp",
            (start, end),
        )
        rows = await cursor.fetchall()
        return {int(row["timestamp"]): int(row["n"]) for row in rows}

    async def impact_counts(self, start: int, end: int) -> dict[str, int]:
        """Violation rows per stored impact within ``[start, end]``."""
        cursor = await self._db.execute(
            "SELECT impact, COUNT(id) AS n FROM accessibility_violations "
            "WHERE timestamp BETWEEN ? AND ? GROUP BY impact",
            (start, end),
        )
        rows = await cursor.fetchall()
        return {str(row["impact"]): int(row["n"]) for row in rows}

    async def count_unique_pages(self, start: int, end: int) -> int:
        cursor = await self._db.execute(
            "SELECT COUNT(DISTINCT scanned_url) FROM accessibility_violations "
            "WHERE timestamp BETWEEN ? AND ?",
            (start, end),
        )
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def top_issues(self, start: int, end: int, limit: int) -> list[dict[str, Any]]:
        """Descriptions ranked by how many rows carry them, most frequent first."""
        cursor = await self._db.execute(
            """
            SELECT description, COUNT(id) AS issue_count
            FROM accessibility_violations
            WHERE timestamp BETWEEN ? AND ?
            GROUP BY description
            ORDER BY issue_count DESC, description ASC
            LIMIT ?
            """,
            (start, end, limit),
        )
        rows = await cursor.fetchall()
        return [
            {"description": row["description"], "issue_count": int(row["issue_count"])}
            for row in rows
        ]

    async def distinct_timestamps(self, start: int, end: int) -> list[int]:
        """Distinct scan timestamps within ``[start, end]``, ascending."""
        cursor = await self._db.execute(
            "SELECT DISTINCT timestamp FROM accessibility_violations "
            "WHERE timestamp BETWEEN ? AND ? ORDER BY timestamp",
            (start, end),
        )
        rows = await cursor.fetchall()
        return [int(row[0]) for row in rows]

    async def count(self) -> int:
        cursor = await self._db.execute("SELECT COUNT(*) FROM accessibility_violations")
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    @staticmethod
    def _to_row(url: str, raw: RawViolation, timestamp: int) -> tuple[Any, ...]:
        record = ViolationRecord.from_raw(raw)
        # Stored impact falls back to minor, matching the scanner's own default.
        impact = record.impact if record.impact is not Impact.UNKNOWN else Impact.MINOR
        nodes = json.dumps(raw.nodes, default=str)
        return (
            url,
            record.rule_id,
            str(impact),
            IMPACT_WEIGHTS[impact],
            record.description,
            record.help,
            record.help_url,
            json.dumps(record.tags),
            record.node_count,
            nodes,
            url,
            nodes,
            timestamp,
        )

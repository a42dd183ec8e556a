# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Snapshot aggregator: folds per-URL impact counts into global totals."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from a11ylens.models.snapshot import AggregatedStats, ImpactCounts, ScanSnapshot

logger = logging.getLogger("a11ylens.analytics.aggregator")


class SnapshotAggregator:
    """Computes :class:`AggregatedStats` from cached snapshots.

    This class is a pure in-memory aggregator.  The cache store fetches the
    snapshots and persists the result; nothing here touches a backend.

    Two paths keep the aggregate equal to the fold over current snapshots:

    * :meth:`recompute` folds every snapshot from scratch.
    * :meth:`apply` swaps one URL's contribution in an existing aggregate,
      subtracting what ``by_url`` recorded for it and adding the new counts.
    """

    # ------------------------------------------------------------------
    # Full fold
    # ------------------------------------------------------------------

    def recompute(self, snapshots: Iterable[ScanSnapshot | None]) -> AggregatedStats:
        """Fold *snapshots* into a fresh aggregate.

        ``None`` entries (registry said scanned, snapshot lookup missed)
        are skipped.
        """
        by_url: dict[str, ImpactCounts] = {}
        skipped = 0
        for snapshot in snapshots:
            if snapshot is None:
                skipped += 1
                continue
            by_url[snapshot.url] = snapshot.violation_counts
        if skipped:
            logger.debug("Skipped %d registered URLs with no cached snapshot", skipped)
        return self._from_breakdown(by_url)

    # ------------------------------------------------------------------
    # Incremental delta
    # ------------------------------------------------------------------

    def apply(
        self,
        stats: AggregatedStats,
        url: str,
        new: ImpactCounts | None,
    ) -> AggregatedStats:
        """Return *stats* with *url* now contributing *new*.

        ``new=None`` removes the URL from the aggregate.
        """
        by_url = dict(stats.by_url)
        old = by_url.pop(url, None)
        if new is not None:
            by_url[url] = new

        totals = ImpactCounts(
            total=stats.total_violations,
            critical=stats.critical_violations,
            serious=stats.serious_violations,
            moderate=stats.moderate_violations,
            minor=stats.minor_violations,
        )
        if old is not None:
            totals = totals.combined(old, sign=-1)
        if new is not None:
            totals = totals.combined(new)

        return self._with_totals(by_url, totals)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _from_breakdown(self, by_url: dict[str, ImpactCounts]) -> AggregatedStats:
        totals = ImpactCounts()
        for counts in by_url.values():
            totals = totals.combined(counts)
        return self._with_totals(by_url, totals)

    @staticmethod
    def _with_totals(by_url: dict[str, ImpactCounts], totals: ImpactCounts) -> AggregatedStats:
        return AggregatedStats(
            unique_urls_scanned=len(by_url),
            total_violations=totals.total,
            critical_violations=totals.critical,
            serious_violations=totals.serious,
            moderate_violations=totals.moderate,
            minor_violations=totals.minor,
            by_url=by_url,
        )

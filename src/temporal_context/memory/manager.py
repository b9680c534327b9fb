"""Memory tier manager: access tracking, tier refresh and pruning."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta

from temporal_context.core.batching import run_in_batches
from temporal_context.core.protocols import ContextStore
from temporal_context.core.types import ContextSnapshot, MemoryTier
from temporal_context.core.utils import validate_limit, validate_project
from temporal_context.memory.types import MemoryStats
from temporal_context.temporal.clock import Clock, SystemClock
from temporal_context.temporal.tiers import (
    DEFAULT_THRESHOLDS,
    TierThresholds,
    calculate_tier,
)

logger = logging.getLogger(__name__)


def _access_sort_key(snapshot: ContextSnapshot) -> tuple[int, float]:
    if snapshot.last_accessed is None:
        return (0, 0.0)
    return (1, snapshot.last_accessed.timestamp())


class MemoryTierManager:
    """Classifies snapshots into relevance tiers and manages their lifecycle.

    The persisted tier is a cache. Every report and every pruning
    decision recomputes the tier from ``last_accessed``.
    """

    def __init__(
        self,
        store: ContextStore,
        clock: Clock | None = None,
        thresholds: TierThresholds = DEFAULT_THRESHOLDS,
        batch_size: int = 50,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._store = store
        self._clock = clock or SystemClock()
        self._thresholds = thresholds
        self._batch_size = batch_size

    @property
    def thresholds(self) -> TierThresholds:
        return self._thresholds

    def calculate_tier(
        self,
        last_accessed: datetime | None,
        now: datetime | None = None,
    ) -> MemoryTier:
        """Classify an access time against this manager's thresholds."""
        return calculate_tier(last_accessed, now or self._clock.now(), self._thresholds)

    async def track_access(self, snapshot_id: str) -> None:
        """Record a logical read of a snapshot.

        Raises:
            NotFoundError: If the snapshot does not exist.
        """
        await self._store.update_access_tracking(snapshot_id, self._clock.now())

    async def get_memory_stats(self, project: str) -> MemoryStats:
        """Count snapshots per freshly computed tier."""
        validate_project(project)
        snapshots = await self._store.find_by_project(project)
        now = self._clock.now()

        stats = MemoryStats(project=project)
        for snap in snapshots:
            tier = self._classify(snap, now)
            if tier is not None:
                stats.increment(tier)
                stats.total += 1

        if snapshots:
            timestamps = [snap.timestamp for snap in snapshots]
            stats.oldest_context = min(timestamps)
            stats.newest_context = max(timestamps)

        return stats

    async def recalculate_all_tiers(
        self,
        project: str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> int:
        """Refresh the persisted tier cache.

        Returns:
            Number of snapshots whose persisted tier changed.
        """
        snapshots = await self._load_scope(project)
        now = self._clock.now()

        async def refresh(snapshot: ContextSnapshot) -> bool:
            tier = self.calculate_tier(snapshot.last_accessed, now)
            if tier == snapshot.tier:
                return False
            await self._store.update_tier(snapshot.id, tier)
            return True

        outcome = await run_in_batches(
            snapshots,
            refresh,
            self._batch_size,
            cancel,
            operation="recalculate_all_tiers",
        )
        logger.info(
            "Recalculated tiers for %s: %d of %d changed",
            project or "all projects",
            outcome.processed,
            len(snapshots),
        )
        return outcome.processed

    async def prune_expired_contexts(
        self,
        limit: int | None = None,
        project: str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> int:
        """Delete EXPIRED snapshots, least recently accessed first.

        Each delete is conditional on the snapshot still not having been
        accessed since the expiry cutoff, so a concurrent read rescues it.

        Returns:
            Number of snapshots deleted.
        """
        validate_limit(limit)
        if limit == 0:
            return 0

        snapshots = await self._load_scope(project)
        now = self._clock.now()
        cutoff = now - timedelta(hours=self._thresholds.archived_hours)

        expired = [
            snap
            for snap in snapshots
            if self._classify(snap, now) == MemoryTier.EXPIRED
        ]
        expired.sort(key=_access_sort_key)
        if limit is not None:
            expired = expired[:limit]

        async def delete(snapshot: ContextSnapshot) -> bool:
            return await self._store.delete_by_id(snapshot.id, accessed_before=cutoff)

        outcome = await run_in_batches(
            expired,
            delete,
            self._batch_size,
            cancel,
            operation="prune_expired_contexts",
        )
        logger.info(
            "Pruned %d expired snapshot(s) from %s",
            outcome.processed,
            project or "all projects",
        )
        return outcome.processed

    async def find_least_recently_used(
        self,
        tier: MemoryTier | str,
        limit: int,
        project: str | None = None,
    ) -> list[ContextSnapshot]:
        """Snapshots currently in ``tier``, oldest access first."""
        tier = MemoryTier.parse(tier)
        validate_limit(limit)
        snapshots = await self._load_scope(project)
        now = self._clock.now()

        matching = [
            snap
            for snap in snapshots
            if self._classify(snap, now) == tier
        ]
        matching.sort(key=_access_sort_key)
        return matching[:limit]

    def _classify(self, snapshot: ContextSnapshot, now: datetime) -> MemoryTier | None:
        try:
            return self.calculate_tier(snapshot.last_accessed, now)
        except (ValueError, TypeError) as e:
            logger.warning("Skipping malformed snapshot %s: %s", snapshot.id, e)
            return None

    async def _load_scope(self, project: str | None) -> list[ContextSnapshot]:
        if project is None:
            return await self._store.find_all()
        validate_project(project)
        return await self._store.find_by_project(project)

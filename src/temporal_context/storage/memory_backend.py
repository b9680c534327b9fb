"""In-process ContextStore backed by a dict."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Sequence

from temporal_context.core.exceptions import NotFoundError
from temporal_context.core.types import ContextSnapshot, MemoryTier

logger = logging.getLogger(__name__)


class InMemoryContextStore:
    """Reference ContextStore keeping snapshots in an id-indexed table.

    A single asyncio lock serializes every read-modify-write, which is
    how this store arbitrates concurrent engine calls. Snapshots are
    frozen, so returned instances can be shared safely.
    """

    def __init__(self, snapshots: Iterable[ContextSnapshot] = ()) -> None:
        self._rows: dict[str, ContextSnapshot] = {snap.id: snap for snap in snapshots}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, snapshot_id: object) -> bool:
        return snapshot_id in self._rows

    async def find_by_id(self, snapshot_id: str) -> ContextSnapshot:
        async with self._lock:
            return self._get(snapshot_id)

    async def find_by_project(
        self,
        project: str,
        limit: int | None = None,
    ) -> list[ContextSnapshot]:
        async with self._lock:
            rows = [snap for snap in self._rows.values() if snap.project == project]
        return self._recent_first(rows, limit)

    async def find_all(self, limit: int | None = None) -> list[ContextSnapshot]:
        async with self._lock:
            rows = list(self._rows.values())
        return self._recent_first(rows, limit)

    async def save(self, snapshot: ContextSnapshot) -> None:
        async with self._lock:
            self._rows[snapshot.id] = snapshot

    async def update_access_tracking(self, snapshot_id: str, now: datetime) -> None:
        async with self._lock:
            snap = self._get(snapshot_id)
            self._rows[snapshot_id] = replace(
                snap,
                last_accessed=now,
                access_count=snap.access_count + 1,
                tier=MemoryTier.ACTIVE,
            )

    async def update_tier(self, snapshot_id: str, tier: MemoryTier) -> None:
        async with self._lock:
            snap = self._get(snapshot_id)
            self._rows[snapshot_id] = replace(snap, tier=tier)

    async def update_prediction(
        self,
        snapshot_id: str,
        score: float,
        reasons: Sequence[str],
        predicted_at: datetime,
    ) -> None:
        async with self._lock:
            snap = self._get(snapshot_id)
            self._rows[snapshot_id] = replace(
                snap,
                prediction_score=score,
                propagation_reasons=tuple(reasons),
                last_predicted=predicted_at,
            )

    async def delete_by_id(
        self,
        snapshot_id: str,
        accessed_before: datetime | None = None,
    ) -> bool:
        async with self._lock:
            snap = self._rows.get(snapshot_id)
            if snap is None:
                return False
            if (
                accessed_before is not None
                and snap.last_accessed is not None
                and snap.last_accessed > accessed_before
            ):
                logger.debug("Kept %s: accessed since %s", snapshot_id, accessed_before)
                return False
            del self._rows[snapshot_id]
            return True

    async def delete_where(
        self,
        tier: MemoryTier,
        project: str | None = None,
    ) -> int:
        async with self._lock:
            doomed = [
                snap.id
                for snap in self._rows.values()
                if snap.tier == tier and (project is None or snap.project == project)
            ]
            for snapshot_id in doomed:
                del self._rows[snapshot_id]
        return len(doomed)

    def _get(self, snapshot_id: str) -> ContextSnapshot:
        try:
            return self._rows[snapshot_id]
        except KeyError:
            raise NotFoundError(snapshot_id) from None

    @staticmethod
    def _recent_first(
        rows: list[ContextSnapshot],
        limit: int | None,
    ) -> list[ContextSnapshot]:
        rows.sort(key=lambda snap: snap.timestamp, reverse=True)
        return rows if limit is None else rows[:limit]

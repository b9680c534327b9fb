"""Protocols (interfaces) for temporal context components."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from temporal_context.core.types import ContextSnapshot, MemoryTier


@runtime_checkable
class ContextStore(Protocol):
    """Persistence backend shared by all engines.

    Implementations arbitrate concurrent writers; engines never lock
    across calls. Transient failures should be retried inside the
    adapter and surfaced as exceptions otherwise.
    """

    async def find_by_id(self, snapshot_id: str) -> ContextSnapshot:
        """Get a snapshot by ID. Raises NotFoundError if absent."""
        ...

    async def find_by_project(
        self,
        project: str,
        limit: int | None = None,
    ) -> list[ContextSnapshot]:
        """Get snapshots in a project, most recent first."""
        ...

    async def find_all(self, limit: int | None = None) -> list[ContextSnapshot]:
        """Get snapshots across every project, most recent first."""
        ...

    async def save(self, snapshot: ContextSnapshot) -> None:
        """Insert or replace a snapshot."""
        ...

    async def update_access_tracking(self, snapshot_id: str, now: datetime) -> None:
        """Set last_accessed, increment access_count and mark the tier ACTIVE."""
        ...

    async def update_tier(self, snapshot_id: str, tier: MemoryTier) -> None:
        """Persist the cached tier for a snapshot."""
        ...

    async def update_prediction(
        self,
        snapshot_id: str,
        score: float,
        reasons: Sequence[str],
        predicted_at: datetime,
    ) -> None:
        """Persist the propagation facet for a snapshot."""
        ...

    async def delete_by_id(
        self,
        snapshot_id: str,
        accessed_before: datetime | None = None,
    ) -> bool:
        """Delete a snapshot. Returns True if deleted.

        With ``accessed_before`` the row is only removed if it was never
        accessed or last accessed at or before that instant.
        """
        ...

    async def delete_where(
        self,
        tier: MemoryTier,
        project: str | None = None,
    ) -> int:
        """Delete every snapshot whose cached tier matches. Returns count."""
        ...

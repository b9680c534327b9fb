"""Access-recency tier classification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from temporal_context.core.types import MemoryTier
from temporal_context.core.utils import hours_between


@dataclass(frozen=True)
class TierThresholds:
    """Upper bounds, in hours since last access, for each tier.

    Bounds are exclusive: an age exactly equal to ``active_hours`` is
    already RECENT.
    """

    active_hours: float = 1.0
    recent_hours: float = 24.0
    archived_hours: float = 720.0  # 30 days

    def __post_init__(self) -> None:
        if self.active_hours <= 0:
            raise ValueError("active_hours must be positive")
        if not self.active_hours < self.recent_hours < self.archived_hours:
            raise ValueError(
                "Tier thresholds must increase: active < recent < archived"
            )


DEFAULT_THRESHOLDS = TierThresholds()


def calculate_tier(
    last_accessed: datetime | None,
    now: datetime,
    thresholds: TierThresholds = DEFAULT_THRESHOLDS,
) -> MemoryTier:
    """Classify a snapshot by how long ago it was last accessed.

    Never-accessed snapshots are ARCHIVED. An access stamped in the future
    (clock skew between writers) counts as ACTIVE.
    """
    if last_accessed is None:
        return MemoryTier.ARCHIVED

    hours = hours_between(last_accessed, now)
    if hours < thresholds.active_hours:
        return MemoryTier.ACTIVE
    if hours < thresholds.recent_hours:
        return MemoryTier.RECENT
    if hours < thresholds.archived_hours:
        return MemoryTier.ARCHIVED
    return MemoryTier.EXPIRED

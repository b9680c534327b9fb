"""Data types for memory tier reporting."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from temporal_context.core.types import MemoryTier


@dataclass
class MemoryStats:
    """Tier histogram for a project, computed from current access times."""

    project: str
    active: int = 0
    recent: int = 0
    archived: int = 0
    expired: int = 0
    total: int = 0
    oldest_context: datetime | None = None
    newest_context: datetime | None = None

    def increment(self, tier: MemoryTier) -> None:
        name = tier.value.lower()
        setattr(self, name, getattr(self, name) + 1)

    def count(self, tier: MemoryTier) -> int:
        return getattr(self, tier.value.lower())

    @property
    def hot(self) -> int:
        """Snapshots in ACTIVE or RECENT."""
        return self.active + self.recent

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": self.project,
            "active": self.active,
            "recent": self.recent,
            "archived": self.archived,
            "expired": self.expired,
            "total": self.total,
            "oldest_context": self.oldest_context.isoformat() if self.oldest_context else None,
            "newest_context": self.newest_context.isoformat() if self.newest_context else None,
        }

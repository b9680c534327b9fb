"""Result types for cross-engine operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from temporal_context.causality.types import (
    CausalChain,
    CausalityStats,
    ReasoningExplanation,
)
from temporal_context.core.types import ContextSnapshot, MemoryTier
from temporal_context.memory.types import MemoryStats
from temporal_context.propagation.types import PropagationStats, ScoreBreakdown


@dataclass
class AnnotatedContext:
    """A loaded snapshot with everything the engines know about it."""

    snapshot: ContextSnapshot
    tier: MemoryTier
    chain: CausalChain
    score: ScoreBreakdown
    reasons: list[str] = field(default_factory=list)

    @property
    def causal_depth(self) -> int:
        return self.chain.total_depth


@dataclass
class ContextExplanation:
    """Reasoning for a snapshot plus a glimpse of its direct cause."""

    reasoning: ReasoningExplanation
    cause: ContextSnapshot | None = None
    cause_missing: bool = False

    def as_text(self) -> str:
        lines = [self.reasoning.as_text()]
        if self.cause is not None:
            when = self.cause.timestamp.strftime("%Y-%m-%d %H:%M")
            lines.append(f"Triggered by: {self.cause.summary} ({when})")
        elif self.cause_missing:
            lines.append("Triggered by: a context that no longer exists")
        return "\n".join(lines)


@dataclass
class SearchHit:
    """A keyword search match annotated with its current tier."""

    snapshot: ContextSnapshot
    tier: MemoryTier
    matched_fields: list[str] = field(default_factory=list)


@dataclass
class ProjectOverview:
    """All three engines' statistics for one project."""

    memory: MemoryStats
    causality: CausalityStats
    propagation: PropagationStats


@dataclass
class MaintenanceReport:
    """Outcome of one maintenance pass."""

    tiers_updated: int = 0
    predictions_updated: int = 0
    pruned: int = 0
    projects: list[str] = field(default_factory=list)
    cancelled: bool = False
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tiers_updated": self.tiers_updated,
            "predictions_updated": self.predictions_updated,
            "pruned": self.pruned,
            "projects": list(self.projects),
            "cancelled": self.cancelled,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

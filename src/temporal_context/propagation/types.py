"""Data types and tuning tables for propagation scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from temporal_context.core.types import ContextSnapshot


class PropagationReason(Enum):
    """Explanatory tokens attached to a prediction score."""

    RECENTLY_ACCESSED = "recently_accessed"
    CAUSAL_CHAIN_ROOT = "causal_chain_root"
    HIGH_ACCESS_FREQUENCY = "high_access_frequency"
    MODERATE_ACCESS_FREQUENCY = "moderate_access_frequency"
    ACTIVE_MEMORY_TIER = "active_memory_tier"
    DECISION_NODE = "decision_node"


@dataclass(frozen=True)
class PropagationConfig:
    """Weights and breakpoint tables for the three sub-scores.

    Breakpoint tables are ``(exclusive upper bound, score)`` pairs for
    temporal scoring (hours since access) and ``(inclusive lower bound,
    score)`` pairs for frequency scoring (access count), each checked in
    order before falling back to the floor score.
    """

    temporal_weight: float = 0.4
    causal_weight: float = 0.3
    frequency_weight: float = 0.3

    temporal_breakpoints: tuple[tuple[float, float], ...] = (
        (1.0, 1.0),
        (6.0, 0.8),
        (24.0, 0.5),
        (168.0, 0.3),  # 1 week
    )
    temporal_floor: float = 0.1

    root_cause_score: float = 1.0
    decision_score: float = 0.9
    branch_point_score: float = 0.8
    leaf_score: float = 0.3
    default_causal_score: float = 0.5
    branch_min_children: int = 2

    frequency_breakpoints: tuple[tuple[int, float], ...] = (
        (10, 1.0),
        (5, 0.7),
        (2, 0.4),
    )
    frequency_floor: float = 0.2

    recent_reason_hours: float = 24.0
    high_frequency_count: int = 10
    moderate_frequency_count: int = 5

    def __post_init__(self) -> None:
        weights = (self.temporal_weight, self.causal_weight, self.frequency_weight)
        if any(w < 0 for w in weights):
            raise ValueError("Weights cannot be negative")
        if sum(weights) > 1.0 + 1e-9:
            raise ValueError("Weights cannot sum to more than 1.0")
        scores = [s for _, s in self.temporal_breakpoints]
        scores += [s for _, s in self.frequency_breakpoints]
        scores += [
            self.temporal_floor,
            self.frequency_floor,
            self.root_cause_score,
            self.decision_score,
            self.branch_point_score,
            self.leaf_score,
            self.default_causal_score,
        ]
        if any(not 0.0 <= s <= 1.0 for s in scores):
            raise ValueError("Sub-scores must be between 0.0 and 1.0")
        if self.moderate_frequency_count > self.high_frequency_count:
            raise ValueError("moderate_frequency_count cannot exceed high_frequency_count")

    def weights(self) -> dict[str, float]:
        return {
            "temporal": self.temporal_weight,
            "causal": self.causal_weight,
            "frequency": self.frequency_weight,
        }


DEFAULT_PROPAGATION_CONFIG = PropagationConfig()


@dataclass(frozen=True)
class ScoreBreakdown:
    """Sub-scores behind one prediction."""

    temporal: float
    causal: float
    frequency: float
    score: float

    def to_dict(self) -> dict[str, float]:
        return {
            "temporal": self.temporal,
            "causal": self.causal,
            "frequency": self.frequency,
            "score": self.score,
        }


@dataclass
class PropagationStats:
    """Aggregate prediction state for a project."""

    project: str
    total_snapshots: int = 0
    scored_snapshots: int = 0
    average_score: float = 0.0
    reason_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": self.project,
            "total_snapshots": self.total_snapshots,
            "scored_snapshots": self.scored_snapshots,
            "average_score": self.average_score,
            "reason_counts": dict(self.reason_counts),
        }


@dataclass
class HighValueContexts:
    """Best-scored snapshots of a project and how many were considered."""

    project: str
    contexts: list[ContextSnapshot] = field(default_factory=list)
    total_evaluated: int = 0

    def __iter__(self) -> Iterator[ContextSnapshot]:
        return iter(self.contexts)

    def __len__(self) -> int:
        return len(self.contexts)

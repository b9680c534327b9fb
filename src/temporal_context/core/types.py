"""Core data types for temporal context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable
from uuid import uuid4

from temporal_context.core.exceptions import InvalidInputError
from temporal_context.core.utils import utc_now


class ActionType(Enum):
    """What kind of activity produced a snapshot."""

    CONVERSATION = "conversation"
    DECISION = "decision"
    FILE_EDIT = "file_edit"
    TOOL_USE = "tool_use"
    RESEARCH = "research"

    @classmethod
    def parse(cls, token: "str | ActionType") -> "ActionType":
        """Parse an external token, raising InvalidInputError if unknown."""
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            try:
                return cls(token.strip().lower())
            except ValueError:
                pass
        raise InvalidInputError(
            "action_type", token, f"must be one of {[a.value for a in cls]}"
        )


class MemoryTier(Enum):
    """Relevance tier derived from access recency."""

    ACTIVE = "ACTIVE"  # < 1 hour
    RECENT = "RECENT"  # 1-24 hours
    ARCHIVED = "ARCHIVED"  # 1-30 days, or never accessed
    EXPIRED = "EXPIRED"  # > 30 days

    @classmethod
    def parse(cls, token: "str | MemoryTier") -> "MemoryTier":
        """Parse an external token, raising InvalidInputError if unknown."""
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            try:
                return cls(token.strip().upper())
            except ValueError:
                pass
        raise InvalidInputError("tier", token, f"must be one of {[t.value for t in cls]}")


def _ordered_unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _new_snapshot_id() -> str:
    return f"ctx_{uuid4().hex}"


@dataclass(frozen=True)
class ContextSnapshot:
    """One preserved unit of context.

    Content fields are write-once. The access, tier and propagation facets
    change only through the store's targeted update methods, which hand
    back new instances.
    """

    project: str
    summary: str = ""
    content: str = ""
    tags: tuple[str, ...] = ()
    id: str = field(default_factory=_new_snapshot_id)
    timestamp: datetime = field(default_factory=utc_now)

    # Causality facet
    action_type: ActionType | None = None
    rationale: str | None = None
    caused_by: str | None = None

    # Memory facet (tier is a cache, see temporal.tiers.calculate_tier)
    tier: MemoryTier = MemoryTier.ARCHIVED
    last_accessed: datetime | None = None
    access_count: int = 0

    # Propagation facet
    prediction_score: float | None = None
    last_predicted: datetime | None = None
    propagation_reasons: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.project, str) or not self.project.strip():
            raise InvalidInputError("project", self.project, "must be a non-empty string")
        if self.access_count < 0:
            raise InvalidInputError("access_count", self.access_count, "cannot be negative")
        if self.prediction_score is not None and not 0.0 <= self.prediction_score <= 1.0:
            raise InvalidInputError(
                "prediction_score", self.prediction_score, "must be between 0.0 and 1.0"
            )
        if self.action_type is not None and not isinstance(self.action_type, ActionType):
            object.__setattr__(self, "action_type", ActionType.parse(self.action_type))
        if not isinstance(self.tier, MemoryTier):
            object.__setattr__(self, "tier", MemoryTier.parse(self.tier))
        object.__setattr__(self, "tags", _ordered_unique(self.tags))
        object.__setattr__(
            self, "propagation_reasons", _ordered_unique(self.propagation_reasons)
        )

    @property
    def is_root_cause(self) -> bool:
        """True when nothing caused this snapshot."""
        return self.caused_by is None

    @property
    def has_causal_metadata(self) -> bool:
        return (
            self.caused_by is not None
            or self.action_type is not None
            or bool(self.rationale)
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-safe primitives."""
        return {
            "id": self.id,
            "project": self.project,
            "summary": self.summary,
            "content": self.content,
            "tags": list(self.tags),
            "timestamp": self.timestamp.isoformat(),
            "action_type": self.action_type.value if self.action_type else None,
            "rationale": self.rationale,
            "caused_by": self.caused_by,
            "tier": self.tier.value,
            "last_accessed": self.last_accessed.isoformat() if self.last_accessed else None,
            "access_count": self.access_count,
            "prediction_score": self.prediction_score,
            "last_predicted": self.last_predicted.isoformat() if self.last_predicted else None,
            "propagation_reasons": list(self.propagation_reasons),
        }

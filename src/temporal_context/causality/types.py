"""Data types for causal chains and reasoning."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator

from temporal_context.core.types import ActionType, ContextSnapshot

NO_RATIONALE = "No rationale provided"


@dataclass(frozen=True)
class ChainLink:
    """One snapshot in a causal chain with its distance from the root."""

    snapshot: ContextSnapshot
    depth: int


@dataclass
class CausalChain:
    """Snapshots linked by ``caused_by``, root cause first.

    ``truncated_at`` names an ancestor id that could not be loaded and
    ``cycle_detected_at`` an id that was revisited. Either one means the
    chain stopped early and ``links[0]`` is not a true root cause.
    """

    links: list[ChainLink] = field(default_factory=list)
    truncated_at: str | None = None
    cycle_detected_at: str | None = None

    def __iter__(self) -> Iterator[ChainLink]:
        return iter(self.links)

    def __len__(self) -> int:
        return len(self.links)

    @property
    def root(self) -> ContextSnapshot | None:
        return self.links[0].snapshot if self.links else None

    @property
    def target(self) -> ContextSnapshot | None:
        """The snapshot the chain was built from."""
        return self.links[-1].snapshot if self.links else None

    @property
    def total_depth(self) -> int:
        return len(self.links) - 1 if self.links else 0

    @property
    def is_complete(self) -> bool:
        """True when traversal reached a snapshot without a cause."""
        return self.truncated_at is None and self.cycle_detected_at is None

    @property
    def ids(self) -> list[str]:
        return [link.snapshot.id for link in self.links]


@dataclass
class ReasoningExplanation:
    """Why a snapshot exists, formatted from its causality facet."""

    snapshot_id: str
    summary: str
    timestamp: datetime
    action_type: ActionType | None
    rationale: str
    caused_by: str | None

    @property
    def has_rationale(self) -> bool:
        return self.rationale != NO_RATIONALE

    def as_text(self) -> str:
        """Render a human-readable explanation."""
        action = self.action_type.value if self.action_type else "unspecified"
        lines = [
            f"Context: {self.summary}",
            f"Action type: {action}",
            f"Rationale: {self.rationale}",
        ]
        if self.caused_by:
            lines.append(f"Caused by: {self.caused_by}")
        else:
            lines.append("Caused by: nothing (root cause)")
        return "\n".join(lines)


@dataclass
class CausalityStats:
    """Aggregate causal metadata for a project.

    ``average_chain_length`` is estimated from ``sampled_chains`` chains,
    not every chain in the project.
    """

    project: str
    total_snapshots: int = 0
    with_causal_metadata: int = 0
    root_causes: int = 0
    action_types: dict[str, int] = field(default_factory=dict)
    average_chain_length: float = 0.0
    max_chain_length: int = 0
    sampled_chains: int = 0


@dataclass
class CausalityConfig:
    """Configuration for causality statistics."""

    stats_sample_size: int = 10

    def __post_init__(self) -> None:
        if self.stats_sample_size < 0:
            raise ValueError("stats_sample_size cannot be negative")

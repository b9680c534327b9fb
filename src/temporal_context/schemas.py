"""Pydantic response models for exposing engine results to a protocol layer."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from temporal_context.causality.types import (
    CausalChain,
    CausalityStats,
    ReasoningExplanation,
)
from temporal_context.core.types import ContextSnapshot
from temporal_context.memory.types import MemoryStats
from temporal_context.propagation.types import (
    HighValueContexts,
    PropagationConfig,
    PropagationStats,
)


# ========== Snapshots ==========

class ContextSnapshotModel(BaseModel):
    id: str
    project: str
    summary: str
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    timestamp: datetime
    action_type: Optional[str] = None
    rationale: Optional[str] = None
    caused_by: Optional[str] = None
    tier: str
    last_accessed: Optional[datetime] = None
    access_count: int = 0
    prediction_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    last_predicted: Optional[datetime] = None
    propagation_reasons: list[str] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: ContextSnapshot) -> "ContextSnapshotModel":
        return cls.model_validate(snapshot.to_dict())


# ========== Causality ==========

class ChainLinkModel(BaseModel):
    id: str
    summary: str
    timestamp: datetime
    caused_by: Optional[str] = None
    action_type: Optional[str] = None
    depth: int


class RootCauseModel(BaseModel):
    id: str
    summary: str


class CausalChainResponse(BaseModel):
    chain: list[ChainLinkModel]
    total_depth: int
    root_cause: Optional[RootCauseModel] = None
    truncated_at: Optional[str] = None
    cycle_detected_at: Optional[str] = None

    @classmethod
    def from_chain(cls, chain: CausalChain) -> "CausalChainResponse":
        root = chain.root
        return cls(
            chain=[
                ChainLinkModel(
                    id=link.snapshot.id,
                    summary=link.snapshot.summary,
                    timestamp=link.snapshot.timestamp,
                    caused_by=link.snapshot.caused_by,
                    action_type=(
                        link.snapshot.action_type.value if link.snapshot.action_type else None
                    ),
                    depth=link.depth,
                )
                for link in chain
            ],
            total_depth=chain.total_depth,
            root_cause=RootCauseModel(id=root.id, summary=root.summary) if root else None,
            truncated_at=chain.truncated_at,
            cycle_detected_at=chain.cycle_detected_at,
        )


class ReasoningResponse(BaseModel):
    snapshot_id: str
    summary: str
    timestamp: datetime
    action_type: Optional[str] = None
    rationale: str
    caused_by: Optional[str] = None
    explanation: str

    @classmethod
    def from_reasoning(cls, reasoning: ReasoningExplanation) -> "ReasoningResponse":
        return cls(
            snapshot_id=reasoning.snapshot_id,
            summary=reasoning.summary,
            timestamp=reasoning.timestamp,
            action_type=reasoning.action_type.value if reasoning.action_type else None,
            rationale=reasoning.rationale,
            caused_by=reasoning.caused_by,
            explanation=reasoning.as_text(),
        )


class CausalityStatsResponse(BaseModel):
    project: str
    total_snapshots: int
    with_causal_metadata: int
    root_causes: int
    action_types: dict[str, int]
    average_chain_length: float
    max_chain_length: int
    sampled_chains: int

    @classmethod
    def from_stats(cls, stats: CausalityStats) -> "CausalityStatsResponse":
        return cls.model_validate(stats, from_attributes=True)


# ========== Memory ==========

class MemoryStatsResponse(BaseModel):
    project: str
    active: int
    recent: int
    archived: int
    expired: int
    total: int
    oldest_context: Optional[datetime] = None
    newest_context: Optional[datetime] = None

    @classmethod
    def from_stats(cls, stats: MemoryStats) -> "MemoryStatsResponse":
        return cls.model_validate(stats.to_dict())


# ========== Propagation ==========

class ScoreWeights(BaseModel):
    temporal: float
    causal: float
    frequency: float


class HighValueContextsResponse(BaseModel):
    contexts: list[ContextSnapshotModel]
    total_evaluated: int
    score_breakdown: ScoreWeights

    @classmethod
    def from_ranking(
        cls,
        ranking: HighValueContexts,
        config: PropagationConfig,
    ) -> "HighValueContextsResponse":
        return cls(
            contexts=[ContextSnapshotModel.from_snapshot(snap) for snap in ranking],
            total_evaluated=ranking.total_evaluated,
            score_breakdown=ScoreWeights(**config.weights()),
        )


class PropagationStatsResponse(BaseModel):
    project: str
    total_snapshots: int
    scored_snapshots: int
    average_score: float
    reason_counts: dict[str, int]

    @classmethod
    def from_stats(cls, stats: PropagationStats) -> "PropagationStatsResponse":
        return cls.model_validate(stats.to_dict())

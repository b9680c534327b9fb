"""Pure scoring functions for propagation prediction.

Everything here is a function of a snapshot, the current time and the
snapshot's child count. No store access.
"""

from __future__ import annotations

from datetime import datetime

from temporal_context.core.types import ActionType, ContextSnapshot, MemoryTier
from temporal_context.core.utils import hours_between
from temporal_context.propagation.types import (
    DEFAULT_PROPAGATION_CONFIG,
    PropagationConfig,
    PropagationReason,
    ScoreBreakdown,
)
from temporal_context.temporal.tiers import (
    DEFAULT_THRESHOLDS,
    TierThresholds,
    calculate_tier,
)


def temporal_score(
    last_accessed: datetime | None,
    now: datetime,
    config: PropagationConfig = DEFAULT_PROPAGATION_CONFIG,
) -> float:
    """Score recency of access; never-accessed scores as the oldest."""
    if last_accessed is None:
        return config.temporal_floor
    hours = hours_between(last_accessed, now)
    for upper, score in config.temporal_breakpoints:
        if hours < upper:
            return score
    return config.temporal_floor


def causal_score(
    snapshot: ContextSnapshot,
    child_count: int,
    config: PropagationConfig = DEFAULT_PROPAGATION_CONFIG,
) -> float:
    """Score causal position: root > decision > branch point > other > leaf."""
    if snapshot.is_root_cause:
        return config.root_cause_score
    if snapshot.action_type == ActionType.DECISION:
        return config.decision_score
    if child_count >= config.branch_min_children:
        return config.branch_point_score
    if child_count == 0:
        return config.leaf_score
    return config.default_causal_score


def frequency_score(
    access_count: int,
    config: PropagationConfig = DEFAULT_PROPAGATION_CONFIG,
) -> float:
    for lower, score in config.frequency_breakpoints:
        if access_count >= lower:
            return score
    return config.frequency_floor


def score_breakdown(
    snapshot: ContextSnapshot,
    now: datetime,
    child_count: int = 0,
    config: PropagationConfig = DEFAULT_PROPAGATION_CONFIG,
) -> ScoreBreakdown:
    """Compute the three sub-scores and their weighted, clamped sum."""
    temporal = temporal_score(snapshot.last_accessed, now, config)
    causal = causal_score(snapshot, child_count, config)
    frequency = frequency_score(snapshot.access_count, config)
    total = (
        config.temporal_weight * temporal
        + config.causal_weight * causal
        + config.frequency_weight * frequency
    )
    return ScoreBreakdown(
        temporal=temporal,
        causal=causal,
        frequency=frequency,
        score=max(0.0, min(1.0, total)),
    )


def propagation_reasons(
    snapshot: ContextSnapshot,
    now: datetime,
    config: PropagationConfig = DEFAULT_PROPAGATION_CONFIG,
    thresholds: TierThresholds = DEFAULT_THRESHOLDS,
) -> list[str]:
    """Reason tokens explaining a score. Every check runs independently."""
    reasons: list[PropagationReason] = []

    if (
        snapshot.last_accessed is not None
        and hours_between(snapshot.last_accessed, now) < config.recent_reason_hours
    ):
        reasons.append(PropagationReason.RECENTLY_ACCESSED)

    if snapshot.is_root_cause:
        reasons.append(PropagationReason.CAUSAL_CHAIN_ROOT)

    if snapshot.access_count >= config.high_frequency_count:
        reasons.append(PropagationReason.HIGH_ACCESS_FREQUENCY)
    elif snapshot.access_count >= config.moderate_frequency_count:
        reasons.append(PropagationReason.MODERATE_ACCESS_FREQUENCY)

    if calculate_tier(snapshot.last_accessed, now, thresholds) == MemoryTier.ACTIVE:
        reasons.append(PropagationReason.ACTIVE_MEMORY_TIER)

    if snapshot.action_type == ActionType.DECISION:
        reasons.append(PropagationReason.DECISION_NODE)

    return [reason.value for reason in reasons]


def is_stale(
    last_predicted: datetime | None,
    threshold_hours: float,
    now: datetime,
) -> bool:
    """True if a prediction was never made or is at least ``threshold_hours`` old."""
    if last_predicted is None:
        return True
    return hours_between(last_predicted, now) >= threshold_hours

"""Propagation scoring: predicting future relevance."""

from temporal_context.propagation.scorer import PropagationScorer, count_children
from temporal_context.propagation.scoring import (
    causal_score,
    frequency_score,
    is_stale,
    propagation_reasons,
    score_breakdown,
    temporal_score,
)
from temporal_context.propagation.types import (
    DEFAULT_PROPAGATION_CONFIG,
    HighValueContexts,
    PropagationConfig,
    PropagationReason,
    PropagationStats,
    ScoreBreakdown,
)

__all__ = [
    "PropagationScorer",
    "count_children",
    "causal_score",
    "frequency_score",
    "is_stale",
    "propagation_reasons",
    "score_breakdown",
    "temporal_score",
    "DEFAULT_PROPAGATION_CONFIG",
    "HighValueContexts",
    "PropagationConfig",
    "PropagationReason",
    "PropagationStats",
    "ScoreBreakdown",
]

"""Causality tracking: why a snapshot exists."""

from temporal_context.causality.engine import CausalityEngine
from temporal_context.causality.types import (
    NO_RATIONALE,
    CausalChain,
    CausalityConfig,
    CausalityStats,
    ChainLink,
    ReasoningExplanation,
)

__all__ = [
    "CausalityEngine",
    "NO_RATIONALE",
    "CausalChain",
    "CausalityConfig",
    "CausalityStats",
    "ChainLink",
    "ReasoningExplanation",
]

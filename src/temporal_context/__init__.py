"""Temporal Context - causality, memory tiers and propagation for stored context.

Three engines operate over snapshots kept in a ContextStore:
- Causality (past): why a snapshot exists, traced back to its root cause
- Memory tiers (present): how relevant it is now, from access recency
- Propagation (future): how likely it is to be needed next

Example:
    >>> from temporal_context import InMemoryContextStore, TemporalOrchestrator
    >>>
    >>> core = TemporalOrchestrator(InMemoryContextStore())
    >>> discussion = await core.save_context("platform", "Horizontal scaling discussion")
    >>> decision = await core.save_context(
    ...     "platform",
    ...     "Redis session storage",
    ...     caused_by=discussion.id,
    ...     action_type="decision",
    ...     rationale="Stateless workers must not lose sessions",
    ... )
    >>> explanation = await core.explain_context(decision.id)
    >>> print(explanation.as_text())
    >>>
    >>> await core.run_maintenance("platform")
    >>> top = await core.propagation.get_high_value_contexts("platform")
"""

from temporal_context.core.types import ActionType, ContextSnapshot, MemoryTier
from temporal_context.core.protocols import ContextStore
from temporal_context.core.exceptions import (
    ContextError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)
from temporal_context.causality import (
    CausalChain,
    CausalityConfig,
    CausalityEngine,
    CausalityStats,
    ChainLink,
    ReasoningExplanation,
)
from temporal_context.memory import MemoryStats, MemoryTierManager
from temporal_context.propagation import (
    HighValueContexts,
    PropagationConfig,
    PropagationReason,
    PropagationScorer,
    PropagationStats,
    ScoreBreakdown,
    is_stale,
)
from temporal_context.temporal import (
    Clock,
    FakeClock,
    SystemClock,
    TierThresholds,
    calculate_tier,
)
from temporal_context.orchestration import (
    AnnotatedContext,
    ContextExplanation,
    MaintenanceReport,
    ProjectOverview,
    SearchHit,
    TemporalOrchestrator,
)
from temporal_context.storage import InMemoryContextStore
from temporal_context.config import MaintenanceConfig, TemporalConfig
from temporal_context.workers import MaintenanceWorker

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "TemporalOrchestrator",
    "TemporalConfig",
    # Core types
    "ActionType",
    "ContextSnapshot",
    "MemoryTier",
    "ContextStore",
    # Exceptions
    "ContextError",
    "InvalidInputError",
    "NotFoundError",
    "StorageError",
    # Causality
    "CausalChain",
    "CausalityConfig",
    "CausalityEngine",
    "CausalityStats",
    "ChainLink",
    "ReasoningExplanation",
    # Memory
    "MemoryStats",
    "MemoryTierManager",
    # Propagation
    "HighValueContexts",
    "PropagationConfig",
    "PropagationReason",
    "PropagationScorer",
    "PropagationStats",
    "ScoreBreakdown",
    "is_stale",
    # Temporal
    "Clock",
    "FakeClock",
    "SystemClock",
    "TierThresholds",
    "calculate_tier",
    # Orchestration
    "AnnotatedContext",
    "ContextExplanation",
    "MaintenanceReport",
    "ProjectOverview",
    "SearchHit",
    # Storage
    "InMemoryContextStore",
    # Maintenance
    "MaintenanceConfig",
    "MaintenanceWorker",
]

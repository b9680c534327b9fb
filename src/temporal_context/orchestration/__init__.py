"""Cross-engine orchestration."""

from temporal_context.orchestration.orchestrator import TemporalOrchestrator
from temporal_context.orchestration.types import (
    AnnotatedContext,
    ContextExplanation,
    MaintenanceReport,
    ProjectOverview,
    SearchHit,
)

__all__ = [
    "TemporalOrchestrator",
    "AnnotatedContext",
    "ContextExplanation",
    "MaintenanceReport",
    "ProjectOverview",
    "SearchHit",
]

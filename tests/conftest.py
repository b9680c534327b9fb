"""Pytest fixtures for temporal-context tests.

Provides fixtures for:
- Fake clock pinned to a fixed UTC instant
- In-memory context store
- Snapshot factory with access times relative to the clock
- Engines and orchestrator wired to the fake clock
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from temporal_context.causality.engine import CausalityEngine
from temporal_context.core.types import ContextSnapshot
from temporal_context.memory.manager import MemoryTierManager
from temporal_context.orchestration.orchestrator import TemporalOrchestrator
from temporal_context.propagation.scorer import PropagationScorer
from temporal_context.storage.memory_backend import InMemoryContextStore
from temporal_context.temporal.clock import FakeClock

NOW = datetime(2024, 10, 17, 16, 0, 0, tzinfo=timezone.utc)


# ============================================================================
# Core fixtures
# ============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a fake clock for testing."""
    return FakeClock(NOW)


@pytest.fixture
def store() -> InMemoryContextStore:
    """Create an empty in-memory store."""
    return InMemoryContextStore()


@pytest.fixture
def make_snapshot(fake_clock: FakeClock) -> Callable[..., ContextSnapshot]:
    """Factory for snapshots with times given in hours before the clock.

    ``accessed_hours_ago=None`` leaves the snapshot never accessed.
    ``predicted_hours_ago`` stamps last_predicted and a score of 0.5
    unless one is passed.
    """

    def _make(
        project: str = "ai-consulting-platform",
        accessed_hours_ago: float | None = None,
        created_hours_ago: float = 0.0,
        predicted_hours_ago: float | None = None,
        **kwargs: Any,
    ) -> ContextSnapshot:
        kwargs.setdefault("summary", "context")
        kwargs.setdefault("timestamp", fake_clock.hours_ago(created_hours_ago))
        if accessed_hours_ago is not None:
            kwargs.setdefault("last_accessed", fake_clock.hours_ago(accessed_hours_ago))
        if predicted_hours_ago is not None:
            kwargs.setdefault("last_predicted", fake_clock.hours_ago(predicted_hours_ago))
            kwargs.setdefault("prediction_score", 0.5)
        return ContextSnapshot(project=project, **kwargs)

    return _make


# ============================================================================
# Engine fixtures
# ============================================================================


@pytest.fixture
def causality(store: InMemoryContextStore) -> CausalityEngine:
    return CausalityEngine(store)


@pytest.fixture
def memory_manager(store: InMemoryContextStore, fake_clock: FakeClock) -> MemoryTierManager:
    return MemoryTierManager(store, clock=fake_clock, batch_size=2)


@pytest.fixture
def scorer(store: InMemoryContextStore, fake_clock: FakeClock) -> PropagationScorer:
    return PropagationScorer(store, clock=fake_clock, batch_size=2)


@pytest.fixture
def orchestrator(store: InMemoryContextStore, fake_clock: FakeClock) -> TemporalOrchestrator:
    return TemporalOrchestrator(store, clock=fake_clock)

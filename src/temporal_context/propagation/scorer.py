"""Propagation scorer: predicts which snapshots will be needed next."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter

from temporal_context.core.batching import run_in_batches
from temporal_context.core.protocols import ContextStore
from temporal_context.core.types import ActionType, ContextSnapshot
from temporal_context.core.utils import (
    validate_limit,
    validate_non_negative,
    validate_project,
)
from temporal_context.propagation.scoring import (
    is_stale,
    propagation_reasons,
    score_breakdown,
)
from temporal_context.propagation.types import (
    DEFAULT_PROPAGATION_CONFIG,
    HighValueContexts,
    PropagationConfig,
    PropagationStats,
    ScoreBreakdown,
)
from temporal_context.temporal.clock import Clock, SystemClock
from temporal_context.temporal.tiers import DEFAULT_THRESHOLDS, TierThresholds

logger = logging.getLogger(__name__)


def count_children(snapshots: list[ContextSnapshot]) -> Counter[str]:
    """Index child counts by parent id."""
    return Counter(snap.caused_by for snap in snapshots if snap.caused_by is not None)


class PropagationScorer:
    """Computes and persists 0.0-1.0 prediction scores.

    Branch points are found by scanning the snapshot's project for
    children; batch updates scan once and share the index.
    """

    def __init__(
        self,
        store: ContextStore,
        clock: Clock | None = None,
        config: PropagationConfig = DEFAULT_PROPAGATION_CONFIG,
        thresholds: TierThresholds = DEFAULT_THRESHOLDS,
        batch_size: int = 50,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._store = store
        self._clock = clock or SystemClock()
        self._config = config
        self._thresholds = thresholds
        self._batch_size = batch_size

    @property
    def config(self) -> PropagationConfig:
        return self._config

    async def calculate_score(
        self,
        snapshot: ContextSnapshot,
        child_count: int | None = None,
    ) -> float:
        """Weighted temporal/causal/frequency score in [0, 1]."""
        breakdown = await self.calculate_breakdown(snapshot, child_count)
        return breakdown.score

    async def calculate_breakdown(
        self,
        snapshot: ContextSnapshot,
        child_count: int | None = None,
    ) -> ScoreBreakdown:
        """Score a snapshot and keep the sub-scores."""
        if child_count is None:
            child_count = await self._child_count(snapshot)
        return score_breakdown(snapshot, self._clock.now(), child_count, self._config)

    def calculate_propagation_reasons(self, snapshot: ContextSnapshot) -> list[str]:
        """Reason tokens derived from the same inputs as the score."""
        return propagation_reasons(
            snapshot, self._clock.now(), self._config, self._thresholds
        )

    async def update_project_predictions(
        self,
        project: str,
        stale_threshold_hours: float = 24,
        cancel: asyncio.Event | None = None,
    ) -> int:
        """Rescore every snapshot in a project whose prediction is stale.

        Returns:
            Number of snapshots rescored.
        """
        validate_project(project)
        validate_non_negative(stale_threshold_hours, "stale_threshold_hours")

        snapshots = await self._store.find_by_project(project)
        children = count_children(snapshots)
        now = self._clock.now()

        async def rescore(snapshot: ContextSnapshot) -> bool:
            if not is_stale(snapshot.last_predicted, stale_threshold_hours, now):
                return False
            breakdown = score_breakdown(
                snapshot, now, children.get(snapshot.id, 0), self._config
            )
            reasons = propagation_reasons(snapshot, now, self._config, self._thresholds)
            await self._store.update_prediction(snapshot.id, breakdown.score, reasons, now)
            return True

        outcome = await run_in_batches(
            snapshots,
            rescore,
            self._batch_size,
            cancel,
            operation="update_project_predictions",
        )
        logger.info(
            "Updated predictions for %s: %d of %d rescored, %d skipped",
            project,
            outcome.processed,
            len(snapshots),
            outcome.skipped,
        )
        return outcome.processed

    async def get_high_value_contexts(
        self,
        project: str,
        min_score: float = 0.6,
        limit: int = 5,
    ) -> list[ContextSnapshot]:
        """Snapshots with a persisted score of at least ``min_score``, best first."""
        ranking = await self.rank_high_value_contexts(project, min_score, limit)
        return ranking.contexts

    async def rank_high_value_contexts(
        self,
        project: str,
        min_score: float = 0.6,
        limit: int = 5,
    ) -> HighValueContexts:
        """Like get_high_value_contexts, also reporting how many were evaluated."""
        validate_project(project)
        validate_non_negative(min_score, "min_score")
        validate_limit(limit)

        snapshots = await self._store.find_by_project(project)
        scored = [
            snap
            for snap in snapshots
            if snap.prediction_score is not None and snap.prediction_score >= min_score
        ]
        # Stable sort keeps the store's most-recent-first order among ties
        scored.sort(key=lambda snap: snap.prediction_score, reverse=True)
        return HighValueContexts(
            project=project,
            contexts=scored[:limit],
            total_evaluated=len(snapshots),
        )

    async def get_propagation_stats(self, project: str) -> PropagationStats:
        validate_project(project)
        snapshots = await self._store.find_by_project(project)
        scored = [snap for snap in snapshots if snap.prediction_score is not None]

        reason_counts: Counter[str] = Counter()
        for snap in scored:
            reason_counts.update(snap.propagation_reasons)

        stats = PropagationStats(
            project=project,
            total_snapshots=len(snapshots),
            scored_snapshots=len(scored),
            reason_counts=dict(reason_counts),
        )
        if scored:
            stats.average_score = sum(s.prediction_score for s in scored) / len(scored)
        return stats

    async def _child_count(self, snapshot: ContextSnapshot) -> int:
        # Root and decision scores outrank branch detection
        if snapshot.is_root_cause or snapshot.action_type == ActionType.DECISION:
            return 0
        siblings = await self._store.find_by_project(snapshot.project)
        return count_children(siblings).get(snapshot.id, 0)

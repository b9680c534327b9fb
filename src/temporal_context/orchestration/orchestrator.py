"""Temporal orchestrator: composes the causality, memory and propagation engines."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from temporal_context.causality.engine import CausalityEngine
from temporal_context.config import TemporalConfig
from temporal_context.core.exceptions import InvalidInputError, NotFoundError
from temporal_context.core.protocols import ContextStore
from temporal_context.core.types import ActionType, ContextSnapshot, MemoryTier
from temporal_context.core.utils import validate_limit, validate_project
from temporal_context.memory.manager import MemoryTierManager
from temporal_context.orchestration.types import (
    AnnotatedContext,
    ContextExplanation,
    MaintenanceReport,
    ProjectOverview,
    SearchHit,
)
from temporal_context.propagation.scorer import PropagationScorer
from temporal_context.temporal.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


class TemporalOrchestrator:
    """Entry point for callers that need more than one engine.

    The engines never call each other; cross-engine reads and the
    maintenance sequence are coordinated here.

    Example:
        >>> store = InMemoryContextStore()
        >>> core = TemporalOrchestrator(store)
        >>> root = await core.save_context("auth", "Security requirements discussion")
        >>> jwt = await core.save_context(
        ...     "auth",
        ...     "Chose JWT with refresh rotation",
        ...     caused_by=root.id,
        ...     action_type="decision",
        ...     rationale="Stateless workers must scale horizontally",
        ... )
        >>> loaded = await core.load_context(jwt.id)
        >>> loaded.chain.ids == [root.id, jwt.id]
        True
    """

    def __init__(
        self,
        store: ContextStore,
        config: TemporalConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._config = config or TemporalConfig()
        self._clock = clock or SystemClock()

        self.causality = CausalityEngine(store, self._config.causality)
        self.memory = MemoryTierManager(
            store,
            clock=self._clock,
            thresholds=self._config.tiers,
            batch_size=self._config.batch_size,
        )
        self.propagation = PropagationScorer(
            store,
            clock=self._clock,
            config=self._config.propagation,
            thresholds=self._config.tiers,
            batch_size=self._config.batch_size,
        )

    @property
    def config(self) -> TemporalConfig:
        return self._config

    async def save_context(
        self,
        project: str,
        summary: str,
        content: str = "",
        tags: Iterable[str] = (),
        caused_by: str | None = None,
        action_type: ActionType | str | None = None,
        rationale: str | None = None,
    ) -> ContextSnapshot:
        """Create a snapshot, optionally linked to the snapshot that caused it.

        The new snapshot counts as accessed at creation, so it starts ACTIVE.

        Raises:
            InvalidInputError: On an empty project or unknown action type.
            NotFoundError: If ``caused_by`` does not resolve.
        """
        validate_project(project)
        parsed_action = ActionType.parse(action_type) if action_type is not None else None
        if caused_by is not None:
            await self._store.find_by_id(caused_by)

        now = self._clock.now()
        snapshot = ContextSnapshot(
            project=project,
            summary=summary,
            content=content,
            tags=tuple(tags),
            timestamp=now,
            action_type=parsed_action,
            rationale=rationale,
            caused_by=caused_by,
            tier=MemoryTier.ACTIVE,
            last_accessed=now,
        )
        await self._store.save(snapshot)
        logger.debug("Saved context %s in %s (caused_by=%s)", snapshot.id, project, caused_by)
        return snapshot

    async def load_context(self, snapshot_id: str) -> AnnotatedContext:
        """Read a snapshot, counting the access, and annotate it.

        The score is computed fresh and not persisted.
        """
        await self.memory.track_access(snapshot_id)
        snapshot = await self._store.find_by_id(snapshot_id)
        chain = await self.causality.build_causal_chain(snapshot_id)
        breakdown = await self.propagation.calculate_breakdown(snapshot)
        return AnnotatedContext(
            snapshot=snapshot,
            tier=self.memory.calculate_tier(snapshot.last_accessed),
            chain=chain,
            score=breakdown,
            reasons=self.propagation.calculate_propagation_reasons(snapshot),
        )

    async def explain_context(self, snapshot_id: str) -> ContextExplanation:
        """Reasoning for a snapshot and the summary of its direct cause."""
        reasoning = await self.causality.reconstruct_reasoning(snapshot_id)
        explanation = ContextExplanation(reasoning=reasoning)
        if reasoning.caused_by is not None:
            try:
                explanation.cause = await self._store.find_by_id(reasoning.caused_by)
            except NotFoundError:
                explanation.cause_missing = True
        return explanation

    async def search_context(
        self,
        project: str,
        query: str,
        limit: int = 10,
    ) -> list[SearchHit]:
        """Case-insensitive keyword search over summary, content and tags.

        Every query term must appear in at least one field. Searching does
        not count as an access.
        """
        validate_project(project)
        validate_limit(limit)
        terms = query.lower().split() if isinstance(query, str) else []
        if not terms:
            raise InvalidInputError("query", query, "must contain at least one term")

        hits: list[SearchHit] = []
        for snap in await self._store.find_by_project(project):
            fields = {
                "summary": snap.summary.lower(),
                "content": snap.content.lower(),
                "tags": " ".join(snap.tags).lower(),
            }
            if not all(any(term in text for text in fields.values()) for term in terms):
                continue
            matched = [
                name for name, text in fields.items() if any(term in text for term in terms)
            ]
            hits.append(
                SearchHit(
                    snapshot=snap,
                    tier=self.memory.calculate_tier(snap.last_accessed),
                    matched_fields=matched,
                )
            )
            if len(hits) >= limit:
                break
        return hits

    async def get_project_overview(self, project: str) -> ProjectOverview:
        memory, causality, propagation = await asyncio.gather(
            self.memory.get_memory_stats(project),
            self.causality.get_causality_stats(project),
            self.propagation.get_propagation_stats(project),
        )
        return ProjectOverview(memory=memory, causality=causality, propagation=propagation)

    async def run_maintenance(
        self,
        project: str | None = None,
        cancel: asyncio.Event | None = None,
        prune_limit: int | None = None,
        stale_threshold_hours: float | None = None,
    ) -> MaintenanceReport:
        """Refresh tiers, prune expired snapshots, then refresh predictions.

        Every step is idempotent, so a cancelled pass can simply be rerun.
        """
        if stale_threshold_hours is None:
            stale_threshold_hours = self._config.default_stale_threshold_hours
        report = MaintenanceReport(started_at=self._clock.now())

        def cancelled() -> bool:
            report.cancelled = cancel is not None and cancel.is_set()
            return report.cancelled

        report.tiers_updated = await self.memory.recalculate_all_tiers(project, cancel)
        if not cancelled():
            report.pruned = await self.memory.prune_expired_contexts(
                prune_limit, project, cancel
            )

        if project is not None:
            report.projects = [project]
        else:
            report.projects = sorted({snap.project for snap in await self._store.find_all()})

        for name in report.projects:
            if cancelled():
                break
            report.predictions_updated += await self.propagation.update_project_predictions(
                name, stale_threshold_hours, cancel
            )
        cancelled()

        report.completed_at = self._clock.now()
        logger.info(
            "Maintenance for %s: %d tier(s) updated, %d pruned, %d prediction(s) refreshed%s",
            project or f"{len(report.projects)} project(s)",
            report.tiers_updated,
            report.pruned,
            report.predictions_updated,
            " (cancelled)" if report.cancelled else "",
        )
        return report

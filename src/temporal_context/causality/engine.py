"""Causality engine: reconstructs why a snapshot exists."""

from __future__ import annotations

import logging
from collections import Counter

from temporal_context.causality.types import (
    NO_RATIONALE,
    CausalChain,
    CausalityConfig,
    CausalityStats,
    ChainLink,
    ReasoningExplanation,
)
from temporal_context.core.exceptions import NotFoundError
from temporal_context.core.protocols import ContextStore
from temporal_context.core.types import ContextSnapshot
from temporal_context.core.utils import validate_project

logger = logging.getLogger(__name__)


class CausalityEngine:
    """Builds and explains causal history.

    The causal graph lives in the store as ``caused_by`` pointers; the
    engine walks them iteratively with a visited set, so cycles and
    pruned ancestors end a walk instead of failing it.
    """

    def __init__(
        self,
        store: ContextStore,
        config: CausalityConfig | None = None,
    ) -> None:
        self._store = store
        self._config = config or CausalityConfig()

    async def build_causal_chain(self, snapshot_id: str) -> CausalChain:
        """Walk ``caused_by`` back from a snapshot to its root cause.

        Raises:
            NotFoundError: If the starting snapshot does not exist.
        """
        current = await self._store.find_by_id(snapshot_id)
        backwards: list[ContextSnapshot] = [current]
        visited = {current.id}
        chain = CausalChain()

        while current.caused_by is not None:
            parent_id = current.caused_by
            if parent_id in visited:
                logger.debug(
                    "Cycle in causal chain of %s: %s revisited", snapshot_id, parent_id
                )
                chain.cycle_detected_at = parent_id
                break
            try:
                current = await self._store.find_by_id(parent_id)
            except NotFoundError:
                logger.debug(
                    "Causal chain of %s truncated: %s no longer exists",
                    snapshot_id,
                    parent_id,
                )
                chain.truncated_at = parent_id
                break
            visited.add(current.id)
            backwards.append(current)

        chain.links = [
            ChainLink(snapshot=snap, depth=depth)
            for depth, snap in enumerate(reversed(backwards))
        ]
        return chain

    async def reconstruct_reasoning(self, snapshot_id: str) -> ReasoningExplanation:
        """Explain a snapshot from its action type, rationale and summary.

        Raises:
            NotFoundError: If the snapshot does not exist.
        """
        snapshot = await self._store.find_by_id(snapshot_id)
        return ReasoningExplanation(
            snapshot_id=snapshot.id,
            summary=snapshot.summary,
            timestamp=snapshot.timestamp,
            action_type=snapshot.action_type,
            rationale=snapshot.rationale or NO_RATIONALE,
            caused_by=snapshot.caused_by,
        )

    async def get_causality_stats(self, project: str) -> CausalityStats:
        """Aggregate causal metadata over a project.

        Average chain length comes from an evenly spaced sample of at most
        ``stats_sample_size`` snapshots taken across the project's
        most-recent-first listing.
        """
        validate_project(project)
        snapshots = await self._store.find_by_project(project)
        stats = CausalityStats(project=project, total_snapshots=len(snapshots))

        action_counts: Counter[str] = Counter()
        for snap in snapshots:
            if snap.has_causal_metadata:
                stats.with_causal_metadata += 1
            if snap.is_root_cause:
                stats.root_causes += 1
            if snap.action_type is not None:
                action_counts[snap.action_type.value] += 1
        stats.action_types = dict(action_counts)

        sample = self._sample(snapshots)
        lengths = []
        for snap in sample:
            try:
                chain = await self.build_causal_chain(snap.id)
            except NotFoundError:
                # Pruned between listing and traversal
                continue
            lengths.append(len(chain))

        if lengths:
            stats.sampled_chains = len(lengths)
            stats.average_chain_length = sum(lengths) / len(lengths)
            stats.max_chain_length = max(lengths)

        return stats

    def _sample(self, snapshots: list[ContextSnapshot]) -> list[ContextSnapshot]:
        size = self._config.stats_sample_size
        if size == 0 or not snapshots:
            return []
        if len(snapshots) <= size:
            return list(snapshots)
        stride = len(snapshots) / size
        return [snapshots[int(i * stride)] for i in range(size)]

"""Tests for the temporal orchestrator, including end-to-end scenarios."""

from __future__ import annotations

import asyncio

import pytest

from temporal_context.config import TemporalConfig
from temporal_context.core.exceptions import InvalidInputError, NotFoundError
from temporal_context.core.types import ActionType, MemoryTier


class TestSaveContext:
    @pytest.mark.asyncio
    async def test_creates_active_snapshot(self, store, orchestrator, fake_clock):
        snap = await orchestrator.save_context(
            "ai-consulting-platform",
            "Redis session storage decision",
            content="Decided to use Redis for session storage.",
            tags=["redis", "sessions"],
            action_type="decision",
            rationale="Stateless Workers",
        )

        stored = await store.find_by_id(snap.id)
        assert stored == snap
        assert snap.timestamp == fake_clock.now()
        assert snap.last_accessed == fake_clock.now()
        assert snap.tier == MemoryTier.ACTIVE
        assert snap.access_count == 0
        assert snap.prediction_score is None
        assert snap.action_type == ActionType.DECISION
        assert snap.tags == ("redis", "sessions")

    @pytest.mark.asyncio
    async def test_cause_must_exist(self, orchestrator):
        with pytest.raises(NotFoundError):
            await orchestrator.save_context("proj", "orphan", caused_by="ctx_missing")

    @pytest.mark.asyncio
    async def test_invalid_inputs(self, orchestrator):
        with pytest.raises(InvalidInputError):
            await orchestrator.save_context("", "no project")
        with pytest.raises(InvalidInputError):
            await orchestrator.save_context("proj", "bad action", action_type="implementation")


class TestEndToEnd:
    """A (root) -> B -> C (decision) scenario."""

    async def _build(self, orchestrator, fake_clock):
        a = await orchestrator.save_context("auth", "Security requirements discussion",
                                            action_type="conversation")
        fake_clock.advance_hours(2)
        b = await orchestrator.save_context("auth", "Researched OAuth2 vs JWT",
                                            caused_by=a.id, action_type="research")
        fake_clock.advance_hours(2)
        c = await orchestrator.save_context(
            "auth",
            "Implemented JWT with refresh rotation",
            caused_by=b.id,
            action_type=ActionType.DECISION,
            rationale="Simplicity plus rotation security",
        )
        return a, b, c

    @pytest.mark.asyncio
    async def test_chain_and_score(self, orchestrator, fake_clock):
        a, b, c = await self._build(orchestrator, fake_clock)

        chain = await orchestrator.causality.build_causal_chain(c.id)
        assert [(link.snapshot.id, link.depth) for link in chain] == [
            (a.id, 0),
            (b.id, 1),
            (c.id, 2),
        ]

        for _ in range(10):
            await orchestrator.memory.track_access(c.id)
        fake_clock.advance_hours(0.5)
        accessed_c = await orchestrator._store.find_by_id(c.id)

        score = await orchestrator.propagation.calculate_score(accessed_c)
        assert score == pytest.approx(0.4 * 1.0 + 0.3 * 0.9 + 0.3 * 1.0)

    @pytest.mark.asyncio
    async def test_load_context_annotates_and_tracks(self, orchestrator, fake_clock):
        a, b, c = await self._build(orchestrator, fake_clock)

        loaded = await orchestrator.load_context(c.id)

        assert loaded.snapshot.access_count == 1
        assert loaded.tier == MemoryTier.ACTIVE
        assert loaded.chain.ids == [a.id, b.id, c.id]
        assert loaded.causal_depth == 2
        assert loaded.score.causal == 0.9
        assert "decision_node" in loaded.reasons
        # The fresh score is not persisted
        assert loaded.snapshot.prediction_score is None

    @pytest.mark.asyncio
    async def test_explain_context(self, store, orchestrator, fake_clock):
        a, b, c = await self._build(orchestrator, fake_clock)

        explanation = await orchestrator.explain_context(c.id)
        assert explanation.cause.id == b.id
        assert "Researched OAuth2 vs JWT" in explanation.as_text()
        assert "Simplicity plus rotation security" in explanation.as_text()

        await store.delete_by_id(b.id)
        explanation = await orchestrator.explain_context(c.id)
        assert explanation.cause is None
        assert explanation.cause_missing
        assert "no longer exists" in explanation.as_text()

    @pytest.mark.asyncio
    async def test_aging_to_expiry_and_pruning(self, orchestrator, fake_clock):
        a, b, c = await self._build(orchestrator, fake_clock)
        fake_clock.advance_hours(2)
        await orchestrator.memory.track_access(c.id)

        fake_clock.advance_hours(719)
        stats = await orchestrator.memory.get_memory_stats("auth")
        assert (stats.expired, stats.archived) == (2, 1)

        assert await orchestrator.memory.prune_expired_contexts() == 2
        chain = await orchestrator.causality.build_causal_chain(c.id)
        assert chain.ids == [c.id]
        assert chain.truncated_at == b.id


class TestSearchContext:
    @pytest.mark.asyncio
    async def test_keyword_match(self, orchestrator, fake_clock):
        await orchestrator.save_context("proj", "JWT token implementation", tags=["auth"])
        fake_clock.advance_hours(1 / 60)
        await orchestrator.save_context("proj", "Rate limiting", content="Per-token buckets")
        await orchestrator.save_context("proj", "Database migration")

        hits = await orchestrator.search_context("proj", "TOKEN")

        assert [hit.snapshot.summary for hit in hits] == ["Rate limiting", "JWT token implementation"]
        assert hits[0].matched_fields == ["content"]
        assert hits[1].matched_fields == ["summary"]
        assert hits[0].tier == MemoryTier.ACTIVE

    @pytest.mark.asyncio
    async def test_all_terms_required(self, orchestrator):
        await orchestrator.save_context("proj", "JWT token implementation", tags=["auth"])
        await orchestrator.save_context("proj", "Token bucket")

        hits = await orchestrator.search_context("proj", "token auth")

        assert [hit.snapshot.summary for hit in hits] == ["JWT token implementation"]
        assert hits[0].matched_fields == ["summary", "tags"]

    @pytest.mark.asyncio
    async def test_does_not_count_as_access(self, store, orchestrator):
        snap = await orchestrator.save_context("proj", "JWT")
        await orchestrator.search_context("proj", "jwt")
        assert (await store.find_by_id(snap.id)).access_count == 0

    @pytest.mark.asyncio
    async def test_limit_and_empty_query(self, orchestrator):
        for i in range(5):
            await orchestrator.save_context("proj", f"note {i}")
        assert len(await orchestrator.search_context("proj", "note", limit=2)) == 2
        with pytest.raises(InvalidInputError):
            await orchestrator.search_context("proj", "   ")


class TestOverviewAndMaintenance:
    @pytest.mark.asyncio
    async def test_project_overview(self, orchestrator):
        root = await orchestrator.save_context("proj", "root")
        await orchestrator.save_context("proj", "child", caused_by=root.id, action_type="decision")

        overview = await orchestrator.get_project_overview("proj")

        assert overview.memory.active == 2
        assert overview.causality.root_causes == 1
        assert overview.propagation.scored_snapshots == 0

    @pytest.mark.asyncio
    async def test_run_maintenance(self, store, orchestrator, fake_clock, make_snapshot):
        await store.save(make_snapshot(project="a", accessed_hours_ago=1000, tier=MemoryTier.ACTIVE))
        await store.save(make_snapshot(project="a", accessed_hours_ago=5, tier=MemoryTier.ACTIVE))
        await store.save(make_snapshot(project="b", accessed_hours_ago=0.5, tier=MemoryTier.ACTIVE))

        report = await orchestrator.run_maintenance()

        assert report.tiers_updated == 2
        assert report.pruned == 1
        assert report.projects == ["a", "b"]
        assert report.predictions_updated == 2
        assert not report.cancelled
        assert report.completed_at == fake_clock.now()

        again = await orchestrator.run_maintenance()
        assert (again.tiers_updated, again.pruned, again.predictions_updated) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_run_maintenance_scoped(self, store, orchestrator, make_snapshot):
        await store.save(make_snapshot(project="a"))
        await store.save(make_snapshot(project="b"))

        report = await orchestrator.run_maintenance("a")

        assert report.projects == ["a"]
        assert report.predictions_updated == 1

    @pytest.mark.asyncio
    async def test_run_maintenance_cancelled(self, store, orchestrator, make_snapshot):
        await store.save(make_snapshot(accessed_hours_ago=1000))
        cancel = asyncio.Event()
        cancel.set()

        report = await orchestrator.run_maintenance(cancel=cancel)

        assert report.cancelled
        assert (report.tiers_updated, report.pruned, report.predictions_updated) == (0, 0, 0)
        assert len(store) == 1
        assert report.to_dict()["cancelled"] is True

    def test_config_defaults(self, orchestrator):
        config = orchestrator.config
        assert isinstance(config, TemporalConfig)
        assert config.batch_size == 50
        assert config.tiers.archived_hours == 720

    def test_config_validation(self):
        with pytest.raises(ValueError):
            TemporalConfig(batch_size=0)

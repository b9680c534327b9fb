"""Basic usage example for Temporal Context."""

import asyncio
import logging

from temporal_context import (
    InMemoryContextStore,
    MaintenanceReport,
    TemporalOrchestrator,
)


async def main():
    logging.basicConfig(level=logging.INFO)

    core = TemporalOrchestrator(InMemoryContextStore())

    # =================================================================
    # SAVING CONTEXT WITH CAUSAL LINKS (Past)
    # =================================================================

    discussion = await core.save_context(
        "ai-consulting-platform",
        "Discussed horizontal scaling of API workers",
        content="Workers must be stateless to scale behind the load balancer.",
        tags=["scaling", "architecture"],
        action_type="conversation",
    )
    research = await core.save_context(
        "ai-consulting-platform",
        "Compared Redis and Postgres for session storage",
        caused_by=discussion.id,
        action_type="research",
    )
    decision = await core.save_context(
        "ai-consulting-platform",
        "Chose Redis for session storage",
        tags=["redis", "sessions"],
        caused_by=research.id,
        action_type="decision",
        rationale="Sub-millisecond reads and native TTLs for sessions",
    )

    print("Saved 3 contexts")

    # =================================================================
    # WHY DOES THIS EXIST?
    # =================================================================

    chain = await core.causality.build_causal_chain(decision.id)
    print(f"\nCausal chain for '{decision.summary}':")
    for link in chain:
        print(f"   {'  ' * link.depth}[{link.depth}] {link.snapshot.summary}")

    explanation = await core.explain_context(decision.id)
    print("\n" + explanation.as_text())

    # =================================================================
    # ACCESS TRACKING AND TIERS (Present)
    # =================================================================

    for _ in range(5):
        await core.load_context(decision.id)

    memory = await core.memory.get_memory_stats("ai-consulting-platform")
    print(f"\nMemory tiers: {memory.to_dict()}")

    # =================================================================
    # PREDICTION (Future)
    # =================================================================

    report: MaintenanceReport = await core.run_maintenance("ai-consulting-platform")
    print(f"\nMaintenance: {report.to_dict()}")

    top = await core.propagation.get_high_value_contexts("ai-consulting-platform", min_score=0.5)
    print("\nLikely needed next:")
    for snap in top:
        print(f"   {snap.prediction_score:.2f} {snap.summary} {list(snap.propagation_reasons)}")

    # =================================================================
    # SEARCH
    # =================================================================

    hits = await core.search_context("ai-consulting-platform", "redis")
    print(f"\nSearch 'redis': {[(hit.snapshot.summary, hit.matched_fields) for hit in hits]}")


if __name__ == "__main__":
    asyncio.run(main())

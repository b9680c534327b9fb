"""Temporal layer: clocks and tier classification."""

from temporal_context.temporal.clock import Clock, FakeClock, SystemClock
from temporal_context.temporal.tiers import (
    DEFAULT_THRESHOLDS,
    TierThresholds,
    calculate_tier,
)

__all__ = [
    "Clock",
    "FakeClock",
    "SystemClock",
    "DEFAULT_THRESHOLDS",
    "TierThresholds",
    "calculate_tier",
]

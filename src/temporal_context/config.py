"""Configuration for the temporal context core and its maintenance worker."""

from __future__ import annotations

from dataclasses import dataclass, field

from temporal_context.causality.types import CausalityConfig
from temporal_context.propagation.types import PropagationConfig
from temporal_context.temporal.tiers import TierThresholds


@dataclass
class TemporalConfig:
    """Settings shared by the three engines."""

    tiers: TierThresholds = field(default_factory=TierThresholds)
    propagation: PropagationConfig = field(default_factory=PropagationConfig)
    causality: CausalityConfig = field(default_factory=CausalityConfig)

    # Snapshots processed concurrently per unit of a batch operation
    batch_size: int = 50
    default_stale_threshold_hours: float = 24.0

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.default_stale_threshold_hours < 0:
            raise ValueError("default_stale_threshold_hours cannot be negative")


@dataclass
class MaintenanceConfig:
    """Configuration for the background maintenance loop."""

    interval_seconds: int = 3600  # 1 hour
    prune_limit: int | None = None  # None = every expired snapshot
    stale_threshold_hours: float = 24.0
    error_backoff_seconds: int = 60

    def __post_init__(self) -> None:
        if self.interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if self.prune_limit is not None and self.prune_limit < 0:
            raise ValueError("prune_limit cannot be negative")

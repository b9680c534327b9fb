"""Tests for access-recency tier classification."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from temporal_context.core.types import MemoryTier
from temporal_context.temporal.clock import FakeClock
from temporal_context.temporal.tiers import TierThresholds, calculate_tier

NOW = datetime(2024, 10, 17, 16, 0, 0, tzinfo=timezone.utc)


class TestCalculateTier:
    """Boundary behaviour of calculate_tier."""

    @pytest.mark.parametrize(
        "age, expected",
        [
            (timedelta(0), MemoryTier.ACTIVE),
            (timedelta(minutes=59, seconds=59), MemoryTier.ACTIVE),
            (timedelta(hours=1), MemoryTier.RECENT),
            (timedelta(hours=23, minutes=59, seconds=59), MemoryTier.RECENT),
            (timedelta(hours=24), MemoryTier.ARCHIVED),
            (timedelta(hours=719, minutes=59, seconds=59), MemoryTier.ARCHIVED),
            (timedelta(hours=720), MemoryTier.EXPIRED),
            (timedelta(days=365), MemoryTier.EXPIRED),
        ],
    )
    def test_boundaries(self, age, expected):
        """Test each threshold is exclusive on the earlier tier."""
        assert calculate_tier(NOW - age, NOW) == expected

    def test_never_accessed_is_archived(self):
        """Test that a missing access time is ARCHIVED, not ACTIVE."""
        assert calculate_tier(None, NOW) == MemoryTier.ARCHIVED

    def test_future_access_is_active(self):
        """Test that clock skew placing access in the future stays ACTIVE."""
        assert calculate_tier(NOW + timedelta(minutes=5), NOW) == MemoryTier.ACTIVE

    def test_deterministic(self):
        """Test same inputs always give the same tier."""
        accessed = NOW - timedelta(hours=5)
        assert {calculate_tier(accessed, NOW) for _ in range(10)} == {MemoryTier.RECENT}

    def test_custom_thresholds(self):
        """Test thresholds are configurable."""
        thresholds = TierThresholds(active_hours=2, recent_hours=10, archived_hours=100)
        assert calculate_tier(NOW - timedelta(hours=1.5), NOW, thresholds) == MemoryTier.ACTIVE
        assert calculate_tier(NOW - timedelta(hours=10), NOW, thresholds) == MemoryTier.ARCHIVED
        assert calculate_tier(NOW - timedelta(hours=100), NOW, thresholds) == MemoryTier.EXPIRED

    def test_tiers_follow_a_fake_clock(self):
        """Test that a snapshot ages through every tier as time passes."""
        clock = FakeClock(NOW)
        accessed = clock.now()
        seen = [calculate_tier(accessed, clock.now())]
        for hours in (1, 23, 696):
            clock.advance_hours(hours)
            seen.append(calculate_tier(accessed, clock.now()))
        assert seen == [
            MemoryTier.ACTIVE,
            MemoryTier.RECENT,
            MemoryTier.ARCHIVED,
            MemoryTier.EXPIRED,
        ]


class TestTierThresholds:
    """Validation of TierThresholds."""

    def test_defaults(self):
        thresholds = TierThresholds()
        assert thresholds.active_hours == 1.0
        assert thresholds.recent_hours == 24.0
        assert thresholds.archived_hours == 720.0

    def test_must_increase(self):
        with pytest.raises(ValueError, match="increase"):
            TierThresholds(active_hours=5, recent_hours=4)

    def test_active_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            TierThresholds(active_hours=0)


class TestFakeClock:
    """Manual time control used to age snapshots."""

    def test_advance_hours(self):
        clock = FakeClock(NOW)
        assert clock.advance_hours(1.5) == NOW + timedelta(hours=1.5)
        assert clock.now() == NOW + timedelta(hours=1.5)

    def test_hours_ago(self):
        clock = FakeClock(NOW)
        assert clock.hours_ago(720) == NOW - timedelta(hours=720)
        assert calculate_tier(clock.hours_ago(720), clock.now()) == MemoryTier.EXPIRED

    def test_cannot_advance_backwards(self):
        clock = FakeClock(NOW)
        with pytest.raises(ValueError):
            clock.advance_hours(-1)
        assert clock.now() == NOW

    def test_set_rewinds(self):
        clock = FakeClock(NOW)
        clock.advance_hours(5)
        clock.set(NOW)
        assert clock.now() == NOW

    def test_rejects_naive_times(self):
        with pytest.raises(ValueError):
            FakeClock(datetime(2024, 10, 17, 16, 0, 0))
        with pytest.raises(ValueError):
            FakeClock(NOW).set(datetime(2024, 10, 17, 16, 0, 0))

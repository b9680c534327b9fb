"""Clocks that drive access tracking and tier aging."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from temporal_context.core.utils import utc_now


class Clock(ABC):
    """Source of "now" for every engine.

    Tiers and propagation scores are pure functions of elapsed hours, so
    swapping the clock is enough to age a whole store deterministically.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Current timezone-aware instant."""
        ...

    def hours_ago(self, hours: float) -> datetime:
        """The instant ``hours`` before now."""
        return self.now() - timedelta(hours=hours)


class SystemClock(Clock):
    """Wall-clock UTC."""

    def now(self) -> datetime:
        return utc_now()


class FakeClock(Clock):
    """Manually driven clock; nothing ages until it is advanced."""

    def __init__(self, start: datetime | None = None) -> None:
        start = start or utc_now()
        if start.tzinfo is None:
            raise ValueError("FakeClock needs a timezone-aware start")
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance_hours(self, hours: float) -> datetime:
        """Move forward by ``hours`` and return the new instant."""
        if hours < 0:
            raise ValueError("hours cannot be negative; use set() to rewind")
        self._now += timedelta(hours=hours)
        return self._now

    def set(self, moment: datetime) -> None:
        """Jump to ``moment``, which may be earlier than now."""
        if moment.tzinfo is None:
            raise ValueError("FakeClock needs a timezone-aware instant")
        self._now = moment

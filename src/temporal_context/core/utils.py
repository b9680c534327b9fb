"""Core utility functions for temporal context."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from temporal_context.core.exceptions import InvalidInputError


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def hours_between(earlier: datetime, later: datetime) -> float:
    """Elapsed hours from ``earlier`` to ``later`` (negative if reversed)."""
    return (later - earlier).total_seconds() / 3600.0


def validate_project(project: str) -> str:
    """Ensure a project key is a non-empty string."""
    if not isinstance(project, str) or not project.strip():
        raise InvalidInputError("project", project, "must be a non-empty string")
    return project


def validate_limit(limit: int | None, name: str = "limit") -> int | None:
    """Ensure an optional limit is a non-negative integer."""
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise InvalidInputError(name, limit, "must be a non-negative integer")
    return limit


def validate_non_negative(value: float, name: str) -> float:
    """Ensure a numeric parameter is finite and non-negative."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(name, value, "must be a number")
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(name, value, "must be finite and non-negative")
    return float(value)

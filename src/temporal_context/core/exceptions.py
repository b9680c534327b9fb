"""Custom exceptions for temporal context."""

from __future__ import annotations

from typing import Any


class ContextError(Exception):
    """Base exception for context operations."""

    pass


class NotFoundError(ContextError):
    """Raised when a requested snapshot does not exist or was pruned."""

    def __init__(self, snapshot_id: str, message: str = ""):
        self.snapshot_id = snapshot_id
        super().__init__(message or f"Snapshot '{snapshot_id}' not found")


class InvalidInputError(ContextError, ValueError):
    """Raised when a caller supplies a malformed argument."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class StorageError(ContextError):
    """Raised by store adapters when persistence fails."""

    pass

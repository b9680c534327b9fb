"""Core types and protocols for temporal context."""

from temporal_context.core.types import (
    ActionType,
    ContextSnapshot,
    MemoryTier,
)
from temporal_context.core.protocols import ContextStore
from temporal_context.core.exceptions import (
    ContextError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)

__all__ = [
    # Types
    "ActionType",
    "ContextSnapshot",
    "MemoryTier",
    # Protocols
    "ContextStore",
    # Exceptions
    "ContextError",
    "InvalidInputError",
    "NotFoundError",
    "StorageError",
]

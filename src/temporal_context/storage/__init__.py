"""Storage backends implementing ContextStore."""

from temporal_context.storage.memory_backend import InMemoryContextStore

__all__ = ["InMemoryContextStore"]

"""Memory tiers: relevance classification and lifecycle."""

from temporal_context.memory.manager import MemoryTierManager
from temporal_context.memory.types import MemoryStats

__all__ = [
    "MemoryTierManager",
    "MemoryStats",
]

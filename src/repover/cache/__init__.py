"""Caching of repository inspection results."""

from repover.cache.memory import InMemoryRecordCache

__all__ = ["InMemoryRecordCache"]

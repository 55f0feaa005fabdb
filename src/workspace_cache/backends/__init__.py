"""Storage backends the cache writes through to."""

from workspace_cache.backends.base import Backend
from workspace_cache.backends.memory import InMemoryBackend
from workspace_cache.backends.sqlite import SQLiteBackend

__all__ = ["Backend", "InMemoryBackend", "SQLiteBackend"]

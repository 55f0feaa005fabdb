"""workspace_cache — A durable key/value cache for workspace state.

Saves land in memory immediately and reach the backend after a debounce
window.  Loads always see the latest save.  Storage failures are logged,
never raised.
"""

from workspace_cache.backends import Backend, InMemoryBackend, SQLiteBackend
from workspace_cache.cache import DurableCache
from workspace_cache.config import CacheConfig
from workspace_cache.exceptions import (
    BackendError,
    CacheError,
    InvalidKeyError,
    QuotaExceededError,
)
from workspace_cache.keys import StorageKeys
from workspace_cache.sanitize import sanitize_for_storage
from workspace_cache.status import BootstrapStatus

__all__ = [
    "Backend",
    "BackendError",
    "BootstrapStatus",
    "CacheConfig",
    "CacheError",
    "DurableCache",
    "InMemoryBackend",
    "InvalidKeyError",
    "QuotaExceededError",
    "SQLiteBackend",
    "StorageKeys",
    "sanitize_for_storage",
]

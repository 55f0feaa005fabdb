"""Custom exceptions for the workspace_cache package."""

from __future__ import annotations


class CacheError(Exception):
    """Base exception for all cache-related errors."""


class InvalidKeyError(CacheError):
    """Raised when a caller passes a key the cache cannot use."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Storage key must be a non-empty string, got {key!r}")


class BackendError(CacheError):
    """Raised when a backend operation fails."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Backend error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class QuotaExceededError(BackendError):
    """Raised by a backend when a write would exceed its capacity."""

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        super().__init__("set", detail or f"quota exceeded while writing '{key}'")

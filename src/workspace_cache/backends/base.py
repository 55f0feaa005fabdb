"""Backend protocol — synchronous, string-only key-value storage."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Backend(ABC):
    """Abstract base for all storage backends.

    A backend is the durable substrate the cache writes through to.  It
    knows nothing about JSON or debouncing — it just persists ``str``
    values keyed by ``str``.  Capacity-limited backends raise
    :class:`~workspace_cache.exceptions.QuotaExceededError` from ``set``
    when a write does not fit.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored text, or ``None`` if not found."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Create or overwrite a value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a value.  No-op if the key does not exist."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Delete every stored value."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        """Return all stored keys."""
        ...

    def __len__(self) -> int:
        return len(self.keys())

    def close(self) -> None:
        """Release any held resources.  Default is a no-op."""

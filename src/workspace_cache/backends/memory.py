"""InMemoryBackend — zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

from workspace_cache.backends.base import Backend
from workspace_cache.exceptions import QuotaExceededError


class InMemoryBackend(Backend):
    """In-memory backend using a plain dict.  Data is lost on process exit.

    Parameters:
        capacity: Optional budget in characters, counting both keys and
                  values (the way browser local storage accounts for
                  usage).  A ``set`` that would exceed it raises
                  :class:`QuotaExceededError` and leaves the old value.
    """

    def __init__(self, capacity: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self.capacity = capacity

    def _usage_without(self, key: str) -> int:
        return sum(len(k) + len(v) for k, v in self._data.items() if k != key)

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.capacity is not None:
            needed = self._usage_without(key) + len(key) + len(value)
            if needed > self.capacity:
                raise QuotaExceededError(
                    key, f"'{key}' needs {needed} chars, capacity is {self.capacity}"
                )
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def __len__(self) -> int:
        return len(self._data)

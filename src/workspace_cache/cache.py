"""DurableCache — debounced, quota-aware write-through cache."""

from __future__ import annotations

import atexit
import json
import logging
import weakref
from functools import partial
from typing import TYPE_CHECKING, Any, TypeVar

from workspace_cache._internal.clock import AsyncioScheduler
from workspace_cache.config import CacheConfig
from workspace_cache.exceptions import InvalidKeyError, QuotaExceededError
from workspace_cache.keys import StorageKeys
from workspace_cache.sanitize import sanitize_for_storage
from workspace_cache.status import BootstrapStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from workspace_cache._internal.clock import Scheduler, TimerHandle
    from workspace_cache.backends.base import Backend

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Caches with flush_on_exit set.  Weak references only; an unclosed cache can still be collected.
_live_caches: weakref.WeakSet[DurableCache] = weakref.WeakSet()


def _flush_live_caches() -> None:
    for cache in list(_live_caches):
        cache.flush_pending_writes()


atexit.register(_flush_live_caches)


def _serialize(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _check_key(key: object) -> None:
    if not isinstance(key, str) or not key:
        raise InvalidKeyError(key)


class DurableCache:
    """Mediates every read and write between application state and a backend.

    ``save`` records the value in memory right away and commits it to the
    backend after a debounce window, so rapid successive saves to one key
    produce a single backend write holding the last value.  ``load`` always
    sees the latest ``save`` for a key, committed or not.

    Storage problems never reach the caller.  Quota failures get one retry
    with embedded images stripped; anything else is logged and the value
    stays memory-resident until a later write succeeds.

    Parameters:
        backend:   Durable substrate.  ``None`` runs the cache in
                   memory-only mode: saves stay visible to ``load`` but
                   are never persisted.
        config:    Debounce and sanitization settings.  Defaults to
                   :class:`CacheConfig`.
        scheduler: Deferred-call primitive for debounced commits.  Defaults
                   to :class:`AsyncioScheduler`.
    """

    def __init__(
        self,
        backend: Backend | None = None,
        *,
        config: CacheConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._backend = backend
        self._config = config or CacheConfig()
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._pending: dict[str, Any] = {}
        self._write_cache: dict[str, str] = {}
        self._timers: dict[str, TimerHandle] = {}
        self._status = BootstrapStatus()
        if self._config.flush_on_exit:
            _live_caches.add(self)

    # ── public API ───────────────────────────────────────────

    def save(self, key: str, value: Any, immediate: bool = False) -> None:
        """Record *value* for *key* and commit it now or after the debounce window."""
        _check_key(key)
        if immediate:
            self._pending[key] = value
            self._commit(key, value)
            return

        # Schedule first: if scheduling fails, the earlier commit stays in place
        handle = self._scheduler.call_later(
            self._config.debounce_seconds, partial(self._on_timer, key)
        )
        self._cancel_timer(key)
        self._pending[key] = value
        self._timers[key] = handle

    def load(self, key: str, fallback: T) -> T:
        """Return the latest value for *key*, or *fallback* if none is readable."""
        _check_key(key)
        if key in self._pending:
            pending: T = self._pending[key]
            return pending

        if self._backend is None:
            return fallback

        try:
            raw = self._backend.get(key)
        except Exception:
            logger.warning("Error reading '%s' from storage, using fallback", key, exc_info=True)
            return fallback

        if raw is None:
            return fallback

        try:
            value: T = json.loads(raw)
        except ValueError:
            logger.warning("Error loading '%s' from storage, using fallback", key)
            return fallback

        self._write_cache[key] = raw
        return value

    def remove(self, key: str) -> None:
        """Forget *key* everywhere: pending state, memo and backend."""
        _check_key(key)
        self._cancel_timer(key)
        self._pending.pop(key, None)
        self._write_cache.pop(key, None)
        if self._backend is None:
            return
        try:
            self._backend.remove(key)
        except Exception:
            logger.error("Error removing '%s' from storage", key, exc_info=True)

    def flush_pending_writes(self) -> None:
        """Commit every pending write now, cancelling its scheduled timer."""
        for key in list(self._timers):
            self._cancel_timer(key)
        for key, value in list(self._pending.items()):
            self._commit(key, value)

    def has_pending_write(self, key: str) -> bool:
        """Return ``True`` if *key* holds a value not yet durably committed."""
        return key in self._pending

    def pending_keys(self) -> list[str]:
        """Return the keys with values not yet durably committed."""
        return list(self._pending)

    def reset(self) -> None:
        """Drop all in-memory state.  The backend is left untouched."""
        for key in list(self._timers):
            self._cancel_timer(key)
        self._pending.clear()
        self._write_cache.clear()
        self._status = BootstrapStatus()

    def close(self) -> None:
        """Flush pending writes and stop tracking this cache for the exit flush."""
        self.flush_pending_writes()
        _live_caches.discard(self)

    def __enter__(self) -> DurableCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── bootstrap ────────────────────────────────────────────

    def hydrate(self, keys: Iterable[str] | None = None) -> BootstrapStatus:
        """Seed the write-cache memo from what the backend already holds.

        Afterwards, saving a value identical to the stored one makes no
        backend call.  Unreadable or corrupted entries are left in place
        and reported through :attr:`bootstrap_status`.
        """
        if self._backend is None:
            self._mark_recovery("Storage is unavailable. Using fresh in-memory defaults.")
            return self._status

        if keys is None:
            try:
                keys = self._backend.keys()
            except Exception:
                logger.warning("Could not enumerate stored keys", exc_info=True)
                self._mark_recovery("Saved data could not be listed. Starting fresh.")
                return self._status

        for key in keys:
            try:
                raw = self._backend.get(key)
            except Exception:
                logger.warning("Could not read '%s' during hydration", key, exc_info=True)
                self._mark_recovery(f"Saved data for {key} could not be read.")
                continue
            if raw is None:
                continue
            try:
                json.loads(raw)
            except ValueError:
                logger.warning("Stored value for '%s' is corrupted", key)
                self._mark_recovery(f"Detected corrupted data for {key}.")
                continue
            self._write_cache[key] = raw

        return self._status

    def migrate_from(self, legacy: Backend, keys: Iterable[str] | None = None) -> BootstrapStatus:
        """Move known keys from *legacy* into this cache's backend.

        Each readable entry is re-serialized canonically and written
        through; it is then removed from *legacy*.  Corrupted entries are
        removed and reported.  An entry whose write fails stays in
        *legacy* and remains visible through ``load``.  Keys that already
        hold a pending write are skipped.
        """
        for key in StorageKeys.all() if keys is None else keys:
            if key in self._pending:
                continue
            try:
                raw = legacy.get(key)
            except Exception:
                logger.warning("Could not read legacy '%s'", key, exc_info=True)
                self._mark_recovery(f"Saved data for {key} could not be read. Resetting to defaults.")
                continue

            if not raw:
                continue

            try:
                value = json.loads(raw)
            except ValueError:
                logger.warning("Legacy value for '%s' is corrupted, discarding", key)
                self._mark_recovery(f"Detected corrupted data for {key}. Starting fresh.")
                self._discard_legacy(legacy, key)
                continue

            self._pending[key] = value
            self._commit(key, value)
            if key not in self._pending:
                self._discard_legacy(legacy, key)

        return self._status

    @property
    def bootstrap_status(self) -> BootstrapStatus:
        return self._status

    @property
    def backend(self) -> Backend | None:
        return self._backend

    @property
    def config(self) -> CacheConfig:
        return self._config

    # ── internals ────────────────────────────────────────────

    def _on_timer(self, key: str) -> None:
        self._timers.pop(key, None)
        if key in self._pending:
            self._commit(key, self._pending[key])

    def _cancel_timer(self, key: str) -> None:
        handle = self._timers.pop(key, None)
        if handle is not None:
            handle.cancel()

    def _commit(self, key: str, value: Any) -> None:
        self._cancel_timer(key)
        backend = self._backend
        if backend is None:
            return

        try:
            serialized = _serialize(value)
        except (TypeError, ValueError, RecursionError):
            logger.error("Value for '%s' is not JSON-serializable", key, exc_info=True)
            return

        try:
            self._write(backend, key, serialized)
        except QuotaExceededError:
            logger.warning("Storage quota exceeded for '%s', retrying without images", key)
            self._commit_sanitized(backend, key, value)
        except Exception:
            logger.error("Error saving '%s' to storage", key, exc_info=True)

    def _commit_sanitized(self, backend: Backend, key: str, value: Any) -> None:
        sanitized = sanitize_for_storage(
            value,
            max_depth=self._config.max_sanitize_depth,
            threshold=self._config.image_threshold,
            prefix=self._config.image_prefix,
            placeholder=self._config.image_placeholder,
        )
        try:
            self._write(backend, key, _serialize(sanitized))
        except Exception:
            logger.error(
                "Could not persist '%s' after quota recovery; keeping it in memory only",
                key,
                exc_info=True,
            )

    def _write(self, backend: Backend, key: str, serialized: str) -> None:
        if self._write_cache.get(key) == serialized:
            logger.debug("Skipping write for '%s': unchanged", key)
        else:
            backend.set(key, serialized)
            self._write_cache[key] = serialized
            logger.debug("Committed '%s' (%d chars)", key, len(serialized))
        self._pending.pop(key, None)

    def _mark_recovery(self, message: str) -> None:
        self._status = self._status.mark_recovery(message)

    @staticmethod
    def _discard_legacy(legacy: Backend, key: str) -> None:
        try:
            legacy.remove(key)
        except Exception:
            logger.warning("Could not remove legacy '%s'", key, exc_info=True)

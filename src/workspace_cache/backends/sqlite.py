"""SQLiteBackend — durable, single-file storage backend."""

from __future__ import annotations

import sqlite3

from workspace_cache._internal.clock import Clock, SystemClock
from workspace_cache.backends.base import Backend
from workspace_cache.exceptions import BackendError, QuotaExceededError

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS cache_records (
    key        TEXT NOT NULL PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at REAL NOT NULL
)
"""


def _is_disk_full(exc: sqlite3.Error) -> bool:
    if getattr(exc, "sqlite_errorname", "") == "SQLITE_FULL":
        return True
    return "database or disk is full" in str(exc)


class SQLiteBackend(Backend):
    """Persistent backend backed by a single SQLite file.

    Parameters:
        db_path:  Path to the SQLite database file.  Use ``":memory:"``
                  for an in-memory database (useful for testing).
        capacity: Optional budget in characters (keys plus values).  Writes
                  past it raise :class:`QuotaExceededError`, as does
                  SQLite's own "database or disk is full" condition.
        clock:    Injectable clock used to stamp ``updated_at``.
    """

    def __init__(
        self,
        db_path: str = "workspace_cache.db",
        *,
        capacity: int | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._db_path = db_path
        self.capacity = capacity
        self._clock = clock or SystemClock()
        self._db: sqlite3.Connection | None = None

    def _connect(self) -> sqlite3.Connection:
        if self._db is None:
            try:
                self._db = sqlite3.connect(self._db_path)
                self._db.execute(_CREATE_TABLE)
                self._db.commit()
            except sqlite3.Error as exc:
                self._db = None
                raise BackendError("connect", str(exc)) from exc
        return self._db

    def close(self) -> None:
        if self._db:
            self._db.close()
            self._db = None

    def _usage_without(self, db: sqlite3.Connection, key: str) -> int:
        row = db.execute(
            "SELECT COALESCE(SUM(LENGTH(key) + LENGTH(value)), 0) FROM cache_records WHERE key != ?",
            (key,),
        ).fetchone()
        return int(row[0])

    # ── Backend protocol ─────────────────────────────────────

    def get(self, key: str) -> str | None:
        db = self._connect()
        try:
            row = db.execute("SELECT value FROM cache_records WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise BackendError("get", str(exc)) from exc
        if row is None:
            return None
        result: str = row[0]
        return result

    def set(self, key: str, value: str) -> None:
        db = self._connect()
        if self.capacity is not None:
            needed = self._usage_without(db, key) + len(key) + len(value)
            if needed > self.capacity:
                raise QuotaExceededError(
                    key, f"'{key}' needs {needed} chars, capacity is {self.capacity}"
                )
        try:
            db.execute(
                "INSERT OR REPLACE INTO cache_records (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, self._clock.now().timestamp()),
            )
            db.commit()
        except sqlite3.Error as exc:
            db.rollback()
            if _is_disk_full(exc):
                raise QuotaExceededError(key, str(exc)) from exc
            raise BackendError("set", str(exc)) from exc

    def remove(self, key: str) -> None:
        db = self._connect()
        try:
            db.execute("DELETE FROM cache_records WHERE key = ?", (key,))
            db.commit()
        except sqlite3.Error as exc:
            raise BackendError("remove", str(exc)) from exc

    def clear(self) -> None:
        db = self._connect()
        try:
            db.execute("DELETE FROM cache_records")
            db.commit()
        except sqlite3.Error as exc:
            raise BackendError("clear", str(exc)) from exc

    def keys(self) -> list[str]:
        db = self._connect()
        try:
            rows = db.execute("SELECT key FROM cache_records ORDER BY key").fetchall()
        except sqlite3.Error as exc:
            raise BackendError("keys", str(exc)) from exc
        return [row[0] for row in rows]

    def updated_at(self, key: str) -> float | None:
        """Return the POSIX timestamp of the last write to *key*, if any."""
        db = self._connect()
        try:
            row = db.execute(
                "SELECT updated_at FROM cache_records WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise BackendError("updated_at", str(exc)) from exc
        return None if row is None else float(row[0])

"""Tests for SQLiteBackend."""

from datetime import UTC, datetime

import pytest

from workspace_cache import BackendError, DurableCache, QuotaExceededError, SQLiteBackend


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self._now = start

    def now(self) -> datetime:
        return datetime.fromtimestamp(self._now, tz=UTC)

    def advance(self, seconds: float) -> None:
        self._now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend(clock):
    b = SQLiteBackend(":memory:", clock=clock)
    yield b
    b.close()


def test_get_nonexistent(backend):
    assert backend.get("key") is None


def test_set_and_get(backend):
    backend.set("k", '{"val":1}')
    assert backend.get("k") == '{"val":1}'


def test_overwrite_updates_timestamp(backend, clock):
    backend.set("k", "1")
    assert backend.updated_at("k") == 1000.0
    clock.advance(5)
    backend.set("k", "2")
    assert backend.get("k") == "2"
    assert backend.updated_at("k") == 1005.0


def test_remove_and_clear(backend):
    backend.set("a", "1")
    backend.set("b", "2")
    backend.remove("a")
    assert backend.keys() == ["b"]
    backend.clear()
    assert len(backend) == 0


def test_updated_at_missing(backend):
    assert backend.updated_at("nope") is None


def test_capacity_exceeded(clock):
    backend = SQLiteBackend(":memory:", capacity=10, clock=clock)
    backend.set("a", "1234")
    with pytest.raises(QuotaExceededError):
        backend.set("b", "12345678")
    assert backend.get("b") is None
    backend.close()


def test_persists_across_connections(tmp_path, clock):
    path = str(tmp_path / "ws.db")
    first = SQLiteBackend(path, clock=clock)
    first.set("k", '"v"')
    first.close()

    second = SQLiteBackend(path, clock=clock)
    assert second.get("k") == '"v"'
    second.close()


def test_unopenable_path_raises_backend_error(tmp_path):
    backend = SQLiteBackend(str(tmp_path / "missing" / "dir" / "ws.db"))
    with pytest.raises(BackendError):
        backend.get("k")


def test_cache_over_sqlite(tmp_path):
    path = str(tmp_path / "ws.db")
    backend = SQLiteBackend(path)
    with DurableCache(backend) as cache:
        cache.save("premiere_mortgage_notes", {"value": "hi"}, immediate=True)
    backend.close()

    reopened = SQLiteBackend(path)
    cache = DurableCache(reopened)
    assert cache.load("premiere_mortgage_notes", None) == {"value": "hi"}
    cache.close()
    reopened.close()


def test_updated_at_wraps_database_errors(backend):
    backend.set("k", "1")
    backend._connect().execute("DROP TABLE cache_records")

    with pytest.raises(BackendError) as exc_info:
        backend.updated_at("k")

    assert exc_info.value.operation == "updated_at"

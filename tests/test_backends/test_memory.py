"""Tests for InMemoryBackend."""

import pytest

from workspace_cache import InMemoryBackend, QuotaExceededError


@pytest.fixture
def backend():
    return InMemoryBackend()


def test_get_nonexistent(backend):
    assert backend.get("key") is None


def test_set_and_get(backend):
    backend.set("k", '{"val":1}')
    assert backend.get("k") == '{"val":1}'


def test_overwrite(backend):
    backend.set("k", "1")
    backend.set("k", "2")
    assert backend.get("k") == "2"


def test_remove(backend):
    backend.set("k", "1")
    backend.remove("k")
    assert backend.get("k") is None


def test_remove_nonexistent(backend):
    backend.remove("nope")  # should not raise


def test_keys_and_len(backend):
    backend.set("a", "1")
    backend.set("b", "2")
    assert sorted(backend.keys()) == ["a", "b"]
    assert len(backend) == 2


def test_clear(backend):
    backend.set("a", "1")
    backend.clear()
    assert backend.keys() == []
    assert len(backend) == 0


def test_capacity_exceeded():
    backend = InMemoryBackend(capacity=10)
    backend.set("a", "12345")
    with pytest.raises(QuotaExceededError) as exc_info:
        backend.set("b", "123456")
    assert exc_info.value.key == "b"
    assert backend.get("b") is None


def test_capacity_counts_replaced_value_once():
    backend = InMemoryBackend(capacity=10)
    backend.set("a", "123456789")
    backend.set("a", "987654321")
    assert backend.get("a") == "987654321"


def test_failed_overwrite_keeps_old_value():
    backend = InMemoryBackend(capacity=5)
    backend.set("a", "1")
    with pytest.raises(QuotaExceededError):
        backend.set("a", "123456")
    assert backend.get("a") == "1"

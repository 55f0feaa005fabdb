"""Tests for the clock and scheduler defaults, driven by a real event loop."""

import asyncio
import json

import pytest

from workspace_cache import CacheConfig, DurableCache, InMemoryBackend
from workspace_cache._internal.clock import AsyncioScheduler, SystemClock


def test_system_clock_is_utc():
    assert SystemClock().now().tzinfo is not None


def test_scheduling_outside_loop_raises():
    with pytest.raises(RuntimeError):
        AsyncioScheduler().call_later(0.1, lambda: None)


async def test_callback_fires_on_loop():
    fired = asyncio.Event()
    AsyncioScheduler().call_later(0.01, fired.set)
    await asyncio.wait_for(fired.wait(), timeout=1)


async def test_cancelled_callback_does_not_fire():
    calls = []
    handle = AsyncioScheduler().call_later(0.01, lambda: calls.append(1))
    handle.cancel()
    await asyncio.sleep(0.05)
    assert calls == []


async def test_debounced_commit_with_event_loop():
    backend = InMemoryBackend()
    cache = DurableCache(
        backend, config=CacheConfig(debounce_seconds=0.02, flush_on_exit=False)
    )

    cache.save("k", {"value": "first"})
    cache.save("k", {"value": "second"})
    assert backend.get("k") is None

    await asyncio.sleep(0.1)

    assert json.loads(backend.get("k")) == {"value": "second"}
    assert not cache.has_pending_write("k")

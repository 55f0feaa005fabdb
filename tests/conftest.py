"""Shared test fixtures."""

from collections.abc import Callable

import pytest

from workspace_cache import CacheConfig, DurableCache, InMemoryBackend


class FakeTimer:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual-advance scheduler.  Timers fire only inside ``advance``."""

    def __init__(self):
        self.now = 0.0
        self._timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self._timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self._timers if not t.cancelled and t.when <= self.now),
            key=lambda t: t.when,
        )
        self._timers = [t for t in self._timers if not t.cancelled and t not in due]
        for timer in due:
            timer.callback()

    @property
    def active(self) -> list[FakeTimer]:
        return [t for t in self._timers if not t.cancelled]


class RecordingBackend(InMemoryBackend):
    """InMemoryBackend that remembers every ``set`` call."""

    def __init__(self, capacity: int | None = None):
        super().__init__(capacity=capacity)
        self.writes: list[tuple[str, str]] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().set(key, value)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def config():
    return CacheConfig(debounce_seconds=0.3, flush_on_exit=False)


@pytest.fixture
def cache(backend, config, scheduler):
    return DurableCache(backend, config=config, scheduler=scheduler)

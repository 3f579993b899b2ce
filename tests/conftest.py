# tests/conftest.py

from __future__ import annotations

import pytest

from taskpulse.engine.engine import NotificationEngine

from .fakes import FakeSink, FakeSnapshots, FakeTimerStore, FixedClock, at


@pytest.fixture()
def snapshots() -> FakeSnapshots:
    return FakeSnapshots()


@pytest.fixture()
def timers() -> FakeTimerStore:
    return FakeTimerStore()


@pytest.fixture()
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(at(8, 0))


@pytest.fixture()
def engine(snapshots: FakeSnapshots, timers: FakeTimerStore, sink: FakeSink, clock: FixedClock) -> NotificationEngine:
    """
    Engine wired with in-memory fakes and default preferences
    (reminder 5 min, repeat 10 min, notify on time).
    """
    return NotificationEngine(snapshots, timers, sink, clock=clock)

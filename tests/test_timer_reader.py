# tests/test_timer_reader.py

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

from taskpulse.tasks.task_models import TimerRecord
from taskpulse.tasks.timer_reader import (
    find_active_sessions,
    is_record_running,
    pick_active_session,
)

from .fakes import at, make_task, running_record


def test_running_record_yields_session_with_interruptions_subtracted() -> None:
    now = at(10, 0)
    task = make_task("x", time_spent_minutes=10)
    records = {"x": running_record(now - timedelta(minutes=40), interruption_seconds=600)}

    (session,) = find_active_sessions([task], records, now)

    assert session.task_id == "x"
    assert session.elapsed_minutes == 30
    assert session.total_minutes == 40


def test_elapsed_is_floored() -> None:
    now = at(10, 0)
    records = {"x": running_record(now - timedelta(minutes=12, seconds=59))}

    (session,) = find_active_sessions([make_task("x")], records, now)

    assert session.elapsed_minutes == 12


def test_interrupted_or_stopped_records_are_not_active() -> None:
    now = at(10, 0)
    start = now - timedelta(minutes=5)
    tasks = [make_task("a"), make_task("b")]
    records = {
        "a": running_record(start, interrupted=True),
        "b": {"isRunning": False, "isInterrupted": False, "startTime": start.isoformat()},
    }

    assert find_active_sessions(tasks, records, now) == []


def test_malformed_records_are_treated_as_not_running() -> None:
    now = at(10, 0)
    tasks = [make_task(t) for t in ("json", "type", "nostart", "list", "good")]
    records = {
        "json": "{not json",
        "type": {"isRunning": "yes", "isInterrupted": False, "startTime": now.isoformat()},
        "nostart": {"isRunning": True, "isInterrupted": False},
        "list": [1, 2, 3],
        "good": json.dumps(running_record(now - timedelta(minutes=3))),
    }

    sessions = find_active_sessions(tasks, records, now)

    assert [s.task_id for s in sessions] == ["good"]
    assert sessions[0].elapsed_minutes == 3


def test_epoch_millis_and_aware_timestamps() -> None:
    now = datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)
    start = now - timedelta(minutes=20)
    records = {
        "ms": {"isRunning": True, "isInterrupted": False, "startTime": int(start.timestamp() * 1000)},
        "iso": {"isRunning": True, "isInterrupted": False, "startTime": "2025-03-10T08:50:00Z"},
    }

    sessions = find_active_sessions([make_task("ms"), make_task("iso")], records, now)

    assert [(s.task_id, s.elapsed_minutes) for s in sessions] == [("ms", 20), ("iso", 10)]


def test_most_recently_started_candidate_wins() -> None:
    now = at(10, 0)
    tasks = [make_task("older"), make_task("newer")]
    records = {
        "older": running_record(now - timedelta(minutes=50)),
        "newer": running_record(now - timedelta(minutes=5)),
    }

    candidates = find_active_sessions(tasks, records, now)
    chosen = pick_active_session(candidates)

    assert len(candidates) == 2
    assert chosen is not None and chosen.task_id == "newer"


def test_pick_with_no_candidates() -> None:
    assert pick_active_session([]) is None


def test_is_record_running_ignores_interruption_flag() -> None:
    now = at(10, 0)
    assert is_record_running(running_record(now, interrupted=True)) is True
    assert is_record_running({"isRunning": False, "isInterrupted": False}) is False
    assert is_record_running("garbage") is False
    assert is_record_running(None) is False


def test_timer_record_parsing_defaults() -> None:
    rec = TimerRecord.from_raw({"isRunning": True})

    assert rec is not None
    assert rec.is_active
    assert rec.start_time is None
    assert rec.total_interruption_seconds == 0.0
    assert TimerRecord.from_raw({"isRunning": True, "totalInterruptionSeconds": "lots"}) is None


def test_unrepresentable_epoch_start_time_is_dropped() -> None:
    for start in (1e20, float("nan")):
        rec = TimerRecord.from_raw({"isRunning": True, "startTime": start})
        assert rec is not None
        assert rec.start_time is None

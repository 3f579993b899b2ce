# tests/test_json_store.py

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from taskpulse.storage.json_store import JsonTaskSnapshotProvider, JsonTimerRecordStore, StaticAuthorizationGate
from taskpulse.tasks.task_models import Priority


def test_task_feed_reads_store_rows(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 7,
                    "title": "Write report",
                    "due_date": "2025-03-10",
                    "due_time": "09:30:00",
                    "estimated_duration": 45,
                    "priority": "URGENT",
                    "is_completed": False,
                    "time_spent": 5,
                },
                {"title": "no id"},
                "not a row",
                {"id": "b", "dueDate": "2025-03-10T00:00:00", "priority": "whenever"},
                {"id": "c", "isCompleted": "false"},
                {"id": "d", "is_completed": "0"},
                {"id": "e", "is_completed": "True"},
            ]
        ),
        "utf-8",
    )

    tasks = JsonTaskSnapshotProvider(path).list_tasks()

    assert [t.id for t in tasks] == ["7", "b", "c", "d", "e"]
    first, second, *flags = tasks
    assert first.due_date == date(2025, 3, 10)
    assert first.due_minutes() == 9 * 60 + 30
    assert first.estimated_duration_minutes == 45
    assert first.priority is Priority.URGENT
    assert first.time_spent_minutes == 5
    assert second.due_date == date(2025, 3, 10)
    assert second.due_time is None
    assert second.priority is Priority.NORMAL
    assert [t.is_completed for t in flags] == [False, False, True]


def test_task_feed_accepts_wrapped_object(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"tasks": [{"id": "a"}]}), "utf-8")

    assert [t.id for t in JsonTaskSnapshotProvider(path).list_tasks()] == ["a"]


def test_missing_or_broken_files_are_empty(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{oops", "utf-8")

    assert JsonTaskSnapshotProvider(tmp_path / "missing.json").list_tasks() == []
    assert JsonTaskSnapshotProvider(broken).list_tasks() == []
    assert JsonTimerRecordStore(tmp_path / "missing.json").load_timer_records() == {}
    assert JsonTimerRecordStore(broken).load_timer_records() == {}


def test_timer_records_are_returned_raw(tmp_path: Path) -> None:
    path = tmp_path / "timers.json"
    inner = json.dumps({"isRunning": True, "isInterrupted": False, "startTime": "2025-03-10T08:00:00"})
    path.write_text(json.dumps({"1": inner, "2": {"isRunning": False}}), "utf-8")

    records = JsonTimerRecordStore(path).load_timer_records()

    assert records == {"1": inner, "2": {"isRunning": False}}


def test_static_gate() -> None:
    gate = StaticAuthorizationGate()
    assert gate.permission() == "granted"

    gate.set("denied")
    assert gate.permission() == "denied"

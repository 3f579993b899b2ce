# src/taskpulse/tasks/task_models.py

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any


class Priority(StrEnum):
    """
    Task priority as stored by the task store.

    Lower rank sorts first in the dynamic schedule.
    """

    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def from_raw(cls, raw: Any) -> Priority:
        if not raw:
            return cls.NORMAL
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.NORMAL


_PRIORITY_RANK = {Priority.URGENT: 0, Priority.HIGH: 1, Priority.NORMAL: 2}


def parse_time_of_day(raw: str | None) -> int | None:
    """
    "HH:MM" or "HH:MM:SS" -> minutes since midnight.

    Seconds are ignored. Returns None for anything that is not a valid time.
    """
    if not raw or not isinstance(raw, str):
        return None
    parts = raw.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        hour = int(parts[0])
        minute = int(parts[1])
        if len(parts) == 3:
            int(parts[2])
    except ValueError:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour * 60 + minute


def _parse_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        # Stores sometimes hand back full timestamps ("2025-01-01T00:00:00").
        return date.fromisoformat(str(raw).strip()[:10])
    except ValueError:
        return None


def _opt_int(raw: Any) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        return int(float(raw))
    except (TypeError, ValueError):
        return None


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return None


_TRUTHY = {"1", "true", "yes", "y", "on"}


def _parse_flag(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUTHY
    return bool(raw)


@dataclass(slots=True, frozen=True)
class TaskSnapshot:
    id: str
    title: str
    due_date: date | None
    due_time: str | None

    estimated_duration_minutes: int | None = None
    priority: Priority = Priority.NORMAL
    is_completed: bool = False
    time_spent_minutes: int | None = None

    def due_minutes(self) -> int | None:
        return parse_time_of_day(self.due_time)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> TaskSnapshot:
        """
        Build a snapshot from a task-store row.

        Accepts both the store's snake_case columns and camelCase keys.
        """
        task_id = _first(raw, "id", "taskId", "task_id")
        if task_id is None or str(task_id).strip() == "":
            raise ValueError("task row has no id")

        due_time = _first(raw, "due_time", "dueTime")
        return cls(
            id=str(task_id),
            title=str(_first(raw, "title") or ""),
            due_date=_parse_date(_first(raw, "due_date", "dueDate")),
            due_time=str(due_time) if due_time is not None else None,
            estimated_duration_minutes=_opt_int(
                _first(raw, "estimated_duration", "estimatedDurationMinutes", "estimated_duration_minutes")
            ),
            priority=Priority.from_raw(_first(raw, "priority")),
            is_completed=_parse_flag(_first(raw, "is_completed", "isCompleted")),
            time_spent_minutes=_opt_int(_first(raw, "time_spent", "timeSpentMinutes", "time_spent_minutes")),
        )


def _parse_timestamp(raw: Any) -> datetime | None:
    if raw is None or raw == "" or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, (int, float)):
        # Browser storage keeps Date.now() values: epoch milliseconds.
        try:
            return datetime.fromtimestamp(float(raw) / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(raw, str):
        s = raw.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            return None
    return None


@dataclass(slots=True, frozen=True)
class TimerRecord:
    """Persisted work-session state of one task (owned by the timer widget)."""

    is_running: bool
    is_interrupted: bool
    start_time: datetime | None
    total_interruption_seconds: float = 0.0

    @property
    def is_active(self) -> bool:
        return self.is_running and not self.is_interrupted

    @classmethod
    def from_raw(cls, raw: Any) -> TimerRecord | None:
        """Parse a stored record (mapping or JSON text). Malformed input -> None."""
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except ValueError:
                return None
        if not isinstance(raw, Mapping):
            return None

        is_running = raw.get("isRunning", raw.get("is_running", False))
        is_interrupted = raw.get("isInterrupted", raw.get("is_interrupted", False))
        if not isinstance(is_running, bool) or not isinstance(is_interrupted, bool):
            return None

        interruption = raw.get("totalInterruptionSeconds", raw.get("total_interruption_seconds", 0))
        try:
            interruption_s = float(interruption or 0)
        except (TypeError, ValueError):
            return None

        return cls(
            is_running=is_running,
            is_interrupted=is_interrupted,
            start_time=_parse_timestamp(raw.get("startTime", raw.get("start_time"))),
            total_interruption_seconds=max(0.0, interruption_s),
        )


@dataclass(slots=True, frozen=True)
class ScheduleEntry:
    """
    Projected window of one task in today's dynamic schedule.

    Recomputed every tick, never persisted. `due_minutes` carries the task's
    stored due time, which start-relative alerts are measured against.
    """

    task_id: str
    start_minutes: int
    end_minutes: int
    duration_minutes: int
    due_minutes: int | None = None


@dataclass(slots=True, frozen=True)
class ActiveSession:
    task_id: str
    start_time: datetime
    elapsed_minutes: int
    total_minutes: int

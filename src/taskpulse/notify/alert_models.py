# src/taskpulse/notify/alert_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class AlertClass(StrEnum):
    BEFORE = "before"
    ON_TIME = "onTime"
    ENDING_SOON = "endingSoon"
    TIME_UP = "timeUp"
    OVERTIME = "overtime"
    SHOULD_END = "shouldEnd"
    LATE = "late"


DEFAULT_REMINDER_MINUTES = 5
DEFAULT_REPEAT_EVERY_MINUTES = 10


def _positive_int(raw: Any, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(slots=True, frozen=True)
class NotificationPreferences:
    """User-facing notification settings (the settings panel values)."""

    reminder_minutes: int = DEFAULT_REMINDER_MINUTES
    repeat_every_minutes: int = DEFAULT_REPEAT_EVERY_MINUTES
    notify_on_time: bool = True

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> NotificationPreferences:
        if not raw:
            return cls()
        return cls(
            reminder_minutes=_positive_int(raw.get("reminderMinutes"), DEFAULT_REMINDER_MINUTES),
            repeat_every_minutes=_positive_int(raw.get("repeatEveryMinutes"), DEFAULT_REPEAT_EVERY_MINUTES),
            # Only an explicit false turns it off.
            notify_on_time=raw.get("notifyOnTime") is not False,
        )


@dataclass(slots=True, frozen=True)
class AlertCandidate:
    """A classification result that still has to pass the cooldown ledger."""

    task_id: str
    alert_class: AlertClass
    cooldown_minutes: int
    title: str
    body: str


@dataclass(slots=True, frozen=True)
class Alert:
    """What actually goes out to the notification sink."""

    task_id: str
    alert_class: AlertClass
    title: str
    body: str
    tag: str
    fired_at: float


def alert_tag(task_id: str, alert_class: AlertClass) -> str:
    return f"task-{alert_class.value}-{task_id}"

# src/taskpulse/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole engine host.
- Nothing required at import time; every value has a default.
- Notification preferences can also come from the user's settings panel
  (NotificationPreferences.from_mapping); env values are the fallback.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .notify.alert_models import NotificationPreferences

ENV_PREFIX = "TASKPULSE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    tasks_path: Path
    timer_records_path: Path

    # ---- Poll loop ----
    poll_interval_seconds: float
    grace_period_seconds: float
    alerts_permission: str

    # ---- Notification preferences ----
    reminder_minutes: int
    repeat_every_minutes: int
    notify_on_time: bool

    # ---- Schedule ----
    max_task_minutes: int
    schedule_gap_minutes: int

    # ---- Delivery ----
    webhook_url: Optional[str]

    def preferences(self) -> NotificationPreferences:
        return NotificationPreferences.from_mapping(
            {
                "reminderMinutes": self.reminder_minutes,
                "repeatEveryMinutes": self.repeat_every_minutes,
                "notifyOnTime": self.notify_on_time,
            }
        )

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskpulse"))
        webhook_url = _env(_k("WEBHOOK_URL"), "").strip() or None

        return Settings(
            app_name=_env(_k("APP_NAME"), "taskpulse"),
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=data_dir,
            tasks_path=_env_path(_k("TASKS_PATH"), data_dir / "tasks.json"),
            timer_records_path=_env_path(_k("TIMER_RECORDS_PATH"), data_dir / "timers.json"),
            poll_interval_seconds=max(1.0, _env_float(_k("POLL_INTERVAL_SECONDS"), 30.0)),
            grace_period_seconds=max(0.0, _env_float(_k("GRACE_PERIOD_SECONDS"), 0.0)),
            alerts_permission=_env(_k("ALERTS_PERMISSION"), "granted").strip().lower(),
            reminder_minutes=_env_int(_k("REMINDER_MINUTES"), 5),
            repeat_every_minutes=_env_int(_k("REPEAT_EVERY_MINUTES"), 10),
            notify_on_time=_env_bool(_k("NOTIFY_ON_TIME"), True),
            max_task_minutes=_env_int(_k("MAX_TASK_MINUTES"), 180),
            schedule_gap_minutes=_env_int(_k("SCHEDULE_GAP_MINUTES"), 5),
            webhook_url=webhook_url,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS

# src/taskpulse/tasks/timer_reader.py

from __future__ import annotations

"""
Timer state reader.

Timer records are written by the work-session widget and shared with us
read-only. They can change (or be half-written) between any two ticks, so
everything here is fail-soft: a record we cannot understand is "not running".
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from .task_models import ActiveSession, TaskSnapshot, TimerRecord

logger = logging.getLogger(__name__)


def _align(ts: datetime, now: datetime) -> datetime:
    """Bring ts to the same naive/aware convention as now."""
    if now.tzinfo is None and ts.tzinfo is not None:
        return ts.astimezone().replace(tzinfo=None)
    if now.tzinfo is not None and ts.tzinfo is None:
        return ts.replace(tzinfo=now.tzinfo)
    return ts


def elapsed_session_minutes(record: TimerRecord, now: datetime) -> int | None:
    """
    Minutes of real work in the running session:
    floor(((now - start) - interruptions) / 60), never negative.
    """
    if record.start_time is None:
        return None
    start = _align(record.start_time, now)
    seconds = (now - start).total_seconds() - record.total_interruption_seconds
    return max(0, math.floor(seconds / 60))


def is_record_running(raw: Any) -> bool:
    record = TimerRecord.from_raw(raw)
    return record is not None and record.is_running


def find_active_sessions(
    tasks: Iterable[TaskSnapshot],
    records: Mapping[str, Any],
    now: datetime,
) -> list[ActiveSession]:
    """
    Return every task whose record shows running-and-not-interrupted.

    Candidates keep snapshot order. More than one candidate means the
    upstream widget broke its own single-timer rule; the caller decides.
    """
    out: list[ActiveSession] = []
    for task in tasks:
        raw = records.get(task.id)
        if raw is None:
            continue

        try:
            record = TimerRecord.from_raw(raw)
            if record is None or not record.is_active:
                if record is None:
                    logger.debug("Unparsable timer record task_id=%s; treating as not running", task.id)
                continue

            elapsed = elapsed_session_minutes(record, now)
        except Exception:
            logger.debug("Timer record check failed task_id=%s", task.id, exc_info=True)
            continue

        if elapsed is None or record.start_time is None:
            logger.debug("Running timer without start time task_id=%s; ignored", task.id)
            continue

        out.append(
            ActiveSession(
                task_id=task.id,
                start_time=_align(record.start_time, now),
                elapsed_minutes=elapsed,
                total_minutes=elapsed + max(0, task.time_spent_minutes or 0),
            )
        )
    return out


def pick_active_session(candidates: list[ActiveSession]) -> ActiveSession | None:
    """Most recently started session wins; ties keep snapshot order."""
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            "Multiple running timers: %s; using the most recently started",
            ", ".join(c.task_id for c in candidates),
        )
    best = candidates[0]
    for c in candidates[1:]:
        if c.start_time > best.start_time:
            best = c
    return best

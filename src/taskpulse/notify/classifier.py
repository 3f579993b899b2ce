# src/taskpulse/notify/classifier.py

from __future__ import annotations

"""
Notification classifier.

Two independent paths per tick:
- the active task, judged by its own elapsed vs estimated time;
- every other scheduled task, judged by its due time and projected window.

Classes are evaluated independently, so one task may produce several
candidates in a tick. Cooldowns are not checked here (see cooldown.py).
"""

from ..tasks.task_models import ActiveSession, ScheduleEntry, TaskSnapshot
from .alert_models import AlertCandidate, AlertClass, NotificationPreferences

ENDING_SOON_MINUTES = 5
OVERTIME_AFTER_MINUTES = 2
SHOULD_END_MINUTES = 5
LATE_WINDOW_MINUTES = 30
FIXED_COOLDOWN_MINUTES = 5


def format_minutes(minutes: int) -> str:
    """45 -> "45 minutes", 120 -> "2 hours", 95 -> "1 hour and 35 minutes"."""
    minutes = abs(int(minutes))
    if minutes < 60:
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    hours, mins = divmod(minutes, 60)
    hours_s = "1 hour" if hours == 1 else f"{hours} hours"
    if not mins:
        return hours_s
    mins_s = "1 minute" if mins == 1 else f"{mins} minutes"
    return f"{hours_s} and {mins_s}"


def classify_active_session(
    task: TaskSnapshot,
    session: ActiveSession,
    prefs: NotificationPreferences,
) -> list[AlertCandidate]:
    estimated = task.estimated_duration_minutes
    if not estimated or estimated <= 0:
        return []

    remaining = estimated - session.total_minutes
    out: list[AlertCandidate] = []

    if 0 < remaining <= ENDING_SOON_MINUTES:
        out.append(
            AlertCandidate(
                task_id=task.id,
                alert_class=AlertClass.ENDING_SOON,
                cooldown_minutes=FIXED_COOLDOWN_MINUTES,
                title=f"⏳ {task.title}",
                body=f"{format_minutes(remaining)} left of the planned time",
            )
        )

    if -OVERTIME_AFTER_MINUTES < remaining <= 0:
        out.append(
            AlertCandidate(
                task_id=task.id,
                alert_class=AlertClass.TIME_UP,
                cooldown_minutes=FIXED_COOLDOWN_MINUTES,
                title=f"🔔 Time is up: {task.title}",
                body="The planned time for this task has ended",
            )
        )

    if remaining <= -OVERTIME_AFTER_MINUTES:
        out.append(
            AlertCandidate(
                task_id=task.id,
                alert_class=AlertClass.OVERTIME,
                cooldown_minutes=prefs.repeat_every_minutes,
                title=f"⚠️ Overtime: {task.title}",
                body=f"{format_minutes(-remaining)} over the planned {format_minutes(estimated)}",
            )
        )

    return out


def classify_scheduled_task(
    task: TaskSnapshot,
    entry: ScheduleEntry,
    *,
    now_minutes: int,
    prefs: NotificationPreferences,
    active_task_id: str | None,
    own_record_running: bool = False,
    own_session_active: bool = False,
) -> list[AlertCandidate]:
    """
    Alerts for a task that is not the active one.

    diff is measured from the task's due time (falls back to the projected
    start when the entry carries none); end_diff from the projected end.
    """
    if task.id == active_task_id:
        return []

    anchor = entry.due_minutes if entry.due_minutes is not None else entry.start_minutes
    diff = anchor - now_minutes
    end_diff = entry.end_minutes - now_minutes
    other_active = active_task_id is not None

    out: list[AlertCandidate] = []

    if 0 < diff <= prefs.reminder_minutes and not other_active:
        out.append(
            AlertCandidate(
                task_id=task.id,
                alert_class=AlertClass.BEFORE,
                cooldown_minutes=prefs.reminder_minutes,
                title=f"⏰ {task.title}",
                body=f"Starts in {format_minutes(diff)}",
            )
        )

    if prefs.notify_on_time and -1 <= diff <= 1 and not other_active:
        out.append(
            AlertCandidate(
                task_id=task.id,
                alert_class=AlertClass.ON_TIME,
                cooldown_minutes=FIXED_COOLDOWN_MINUTES,
                title=f"🔔 {task.title}",
                body="Time to start!",
            )
        )

    if 0 < end_diff <= SHOULD_END_MINUTES and not own_session_active:
        out.append(
            AlertCandidate(
                task_id=task.id,
                alert_class=AlertClass.SHOULD_END,
                cooldown_minutes=FIXED_COOLDOWN_MINUTES,
                title=f"🏁 {task.title}",
                body=f"Planned to end in {format_minutes(end_diff)}",
            )
        )

    if -LATE_WINDOW_MINUTES < diff < -1:
        worked_on = (task.time_spent_minutes or 0) > 0
        if not other_active and not worked_on and not own_record_running:
            out.append(
                AlertCandidate(
                    task_id=task.id,
                    alert_class=AlertClass.LATE,
                    cooldown_minutes=prefs.repeat_every_minutes,
                    title=f"🔄 Late: {task.title}",
                    body=f"Was supposed to start {format_minutes(-diff)} ago",
                )
            )

    return out

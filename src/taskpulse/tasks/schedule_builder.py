# src/taskpulse/tasks/schedule_builder.py

from __future__ import annotations

"""
Dynamic day schedule.

Projects "what would happen if work proceeded in this order from now":
today's remaining tasks are ordered and laid out back to back starting at the
current minute, with a fixed gap between them. This is recomputed every tick
and is deliberately independent of each task's stored due time.
"""

from collections.abc import Collection, Iterable
from datetime import date

from .task_models import ScheduleEntry, TaskSnapshot

MAX_TASK_MINUTES = 180
GAP_MINUTES = 5
DEFAULT_DURATION_MINUTES = 30


def is_large_project(task: TaskSnapshot, max_task_minutes: int = MAX_TASK_MINUTES) -> bool:
    est = task.estimated_duration_minutes
    return est is not None and est > max_task_minutes


def _sort_key(task: TaskSnapshot, active_task_id: str | None) -> tuple[int, int, int, int]:
    due = task.due_minutes()
    return (
        0 if task.id == active_task_id else 1,
        task.priority.rank,
        0 if due is not None else 1,
        due if due is not None else 0,
    )


def schedulable_tasks(
    tasks: Iterable[TaskSnapshot],
    *,
    today: date,
    active_task_id: str | None = None,
    excluded_ids: Collection[str] = (),
    max_task_minutes: int = MAX_TASK_MINUTES,
) -> list[TaskSnapshot]:
    out: list[TaskSnapshot] = []
    for task in tasks:
        if task.is_completed or task.id in excluded_ids:
            continue
        if task.due_date != today:
            continue
        if is_large_project(task, max_task_minutes):
            continue
        # Untimed tasks only get a slot while they are being worked on.
        if task.due_minutes() is None and task.id != active_task_id:
            continue
        out.append(task)
    return out


def build_schedule(
    tasks: Iterable[TaskSnapshot],
    *,
    today: date,
    now_minutes: int,
    active_task_id: str | None = None,
    excluded_ids: Collection[str] = (),
    max_task_minutes: int = MAX_TASK_MINUTES,
    gap_minutes: int = GAP_MINUTES,
    default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
) -> list[ScheduleEntry]:
    """
    Order today's tasks and place them from now_minutes onward.

    Ordering (stable): active task, then priority (urgent < high < normal),
    then due time ascending with untimed tasks last. Each task takes
    [cursor, cursor + duration) and the cursor moves on by duration + gap.

    Pure: same inputs, same output.
    """
    selected = schedulable_tasks(
        tasks,
        today=today,
        active_task_id=active_task_id,
        excluded_ids=excluded_ids,
        max_task_minutes=max_task_minutes,
    )
    ordered = sorted(selected, key=lambda t: _sort_key(t, active_task_id))

    entries: list[ScheduleEntry] = []
    cursor = int(now_minutes)
    for task in ordered:
        duration = task.estimated_duration_minutes
        if duration is None or duration <= 0:
            duration = default_duration_minutes
        entries.append(
            ScheduleEntry(
                task_id=task.id,
                start_minutes=cursor,
                end_minutes=cursor + duration,
                duration_minutes=duration,
                due_minutes=task.due_minutes(),
            )
        )
        cursor += duration + gap_minutes
    return entries

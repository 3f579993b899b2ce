# src/taskpulse/engine/engine.py

from __future__ import annotations

"""
Notification engine.

One tick = one full pass:
  snapshot -> timer reader -> schedule builder -> classifier -> cooldown filter -> dispatch

Every decision is computed from the absolute current time, so a skipped or
late tick corrects itself on the next one. All mutable state (cooldowns,
completed set, history) belongs to this instance.
"""

import logging
from collections import deque
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from ..core.ports import NotificationSink, TaskSnapshotProvider, TimerRecordStore
from ..notify.alert_models import Alert, AlertCandidate, NotificationPreferences, alert_tag
from ..notify.classifier import classify_active_session, classify_scheduled_task
from ..notify.cooldown import CooldownLedger
from ..notify.dispatcher import Dispatcher
from ..tasks.schedule_builder import DEFAULT_DURATION_MINUTES, GAP_MINUTES, MAX_TASK_MINUTES, build_schedule
from ..tasks.task_models import TaskSnapshot
from ..tasks.timer_reader import find_active_sessions, is_record_running, pick_active_session

_UNSEEN = object()


class NotificationEngine:
    def __init__(
        self,
        snapshots: TaskSnapshotProvider,
        timer_store: TimerRecordStore,
        sink: NotificationSink,
        *,
        preferences: NotificationPreferences | None = None,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
        max_task_minutes: int = MAX_TASK_MINUTES,
        gap_minutes: int = GAP_MINUTES,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
        grace_period_seconds: float = 0.0,
        history_size: int = 100,
    ) -> None:
        self._snapshots = snapshots
        self._timer_store = timer_store
        self._clock = clock or datetime.now
        self._log = logger or logging.getLogger(__name__)
        self._dispatcher = Dispatcher(sink, logger=self._log)

        self.preferences = preferences or NotificationPreferences()
        self.max_task_minutes = int(max_task_minutes)
        self.gap_minutes = int(gap_minutes)
        self.default_duration_minutes = int(default_duration_minutes)
        self.grace_period_seconds = max(0.0, float(grace_period_seconds))

        self.ledger = CooldownLedger()
        self._history: deque[Alert] = deque(maxlen=max(1, int(history_size)))
        self._due_times: dict[str, Any] = {}
        self._activated_ts: float | None = None

    @property
    def history(self) -> list[Alert]:
        """Most recent alerts attempted, oldest first."""
        return list(self._history)

    def activate(self, now: datetime | None = None) -> None:
        """Mark (re)activation; restarts the startup grace period."""
        self._activated_ts = (now or self._clock()).timestamp()
        self._log.debug("Engine activated grace=%ss", self.grace_period_seconds)

    # ---- pass steps ----

    def _read_tasks(self) -> list[TaskSnapshot]:
        try:
            return list(self._snapshots.list_tasks())
        except Exception:
            self._log.exception("list_tasks failed")
            return []

    def _read_timer_records(self) -> Mapping[str, Any]:
        try:
            records = self._timer_store.load_timer_records()
        except Exception:
            self._log.exception("load_timer_records failed")
            return {}
        return records if isinstance(records, Mapping) else {}

    def _observe(self, tasks: list[TaskSnapshot]) -> None:
        """Completion flips and due-time edits reset what we know about a task."""
        seen = {task.id for task in tasks}
        for task_id in [k for k in self._due_times if k not in seen]:
            del self._due_times[task_id]

        for task in tasks:
            if task.is_completed:
                if self.ledger.mark_completed(task.id):
                    self._log.info("Task %s completed; no further alerts", task.id)
                continue

            prev = self._due_times.get(task.id, _UNSEEN)
            if prev is not _UNSEEN and prev != task.due_time:
                dropped = self.ledger.forget_task(task.id)
                self._log.debug(
                    "Due time changed task_id=%s %s -> %s; cleared %d cooldowns",
                    task.id,
                    prev,
                    task.due_time,
                    dropped,
                )
            self._due_times[task.id] = task.due_time

    def _in_grace(self, now_ts: float) -> bool:
        if self.grace_period_seconds <= 0 or self._activated_ts is None:
            return False
        return (now_ts - self._activated_ts) < self.grace_period_seconds

    def classify(self, tasks: list[TaskSnapshot], records: Mapping[str, Any], now: datetime) -> list[AlertCandidate]:
        """Everything due this tick, before cooldowns."""
        open_tasks = [t for t in tasks if not t.is_completed and not self.ledger.is_completed(t.id)]
        by_id = {t.id: t for t in open_tasks}

        candidates = find_active_sessions(open_tasks, records, now)
        session = pick_active_session(candidates)
        active_id = session.task_id if session is not None else None
        session_ids = {c.task_id for c in candidates}

        now_minutes = now.hour * 60 + now.minute
        entries = build_schedule(
            open_tasks,
            today=now.date(),
            now_minutes=now_minutes,
            active_task_id=active_id,
            excluded_ids=self.ledger.completed_ids,
            max_task_minutes=self.max_task_minutes,
            gap_minutes=self.gap_minutes,
            default_duration_minutes=self.default_duration_minutes,
        )

        prefs = self.preferences
        out: list[AlertCandidate] = []

        if session is not None:
            try:
                out.extend(classify_active_session(by_id[session.task_id], session, prefs))
            except Exception:
                self._log.exception("classify active task failed task_id=%s", session.task_id)

        for entry in entries:
            task = by_id.get(entry.task_id)
            if task is None or task.id == active_id:
                continue
            try:
                out.extend(
                    classify_scheduled_task(
                        task,
                        entry,
                        now_minutes=now_minutes,
                        prefs=prefs,
                        active_task_id=active_id,
                        own_record_running=is_record_running(records.get(task.id)),
                        own_session_active=task.id in session_ids,
                    )
                )
            except Exception:
                self._log.exception("classify failed task_id=%s", task.id)

        self._log.debug(
            "Tick tasks=%d scheduled=%d active=%s candidates=%d",
            len(open_tasks),
            len(entries),
            active_id,
            len(out),
        )
        return out

    async def _fire(self, pending: list[AlertCandidate], now_ts: float) -> list[Alert]:
        if not pending:
            return []
        if self._in_grace(now_ts):
            self._log.debug("Within startup grace period; %d alerts held back", len(pending))
            return []

        fired: list[Alert] = []
        for cand in pending:
            # Completion may have been observed after this candidate was built.
            if self.ledger.is_completed(cand.task_id):
                continue
            if not self.ledger.can_fire(cand.task_id, cand.alert_class, cand.cooldown_minutes, now_ts):
                continue

            alert = Alert(
                task_id=cand.task_id,
                alert_class=cand.alert_class,
                title=cand.title,
                body=cand.body,
                tag=alert_tag(cand.task_id, cand.alert_class),
                fired_at=now_ts,
            )
            self.ledger.mark_fired(cand.task_id, cand.alert_class, now_ts)
            await self._dispatcher.dispatch(alert)
            self._history.append(alert)
            fired.append(alert)

        if fired:
            self._log.info("Sent %d alerts", len(fired))
        return fired

    async def tick(self, now: datetime | None = None) -> list[Alert]:
        """Run one pass. Returns the alerts that were attempted."""
        now = now or self._clock()
        now_ts = now.timestamp()
        if self._activated_ts is None:
            self._activated_ts = now_ts

        tasks = self._read_tasks()
        self._observe(tasks)
        records = self._read_timer_records()

        pending = self.classify(tasks, records, now)
        self.ledger.prune(now_ts)
        return await self._fire(pending, now_ts)

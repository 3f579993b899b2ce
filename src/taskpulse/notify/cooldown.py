# src/taskpulse/notify/cooldown.py

from __future__ import annotations

import logging

from .alert_models import AlertClass

logger = logging.getLogger(__name__)

DAY_SECONDS = 24 * 60 * 60


class CooldownLedger:
    """
    Per-(task, alert class) last-fired timestamps plus the completed set.

    Owned by exactly one engine instance; process-local, never persisted.
    Only the last firing per key is kept.
    """

    def __init__(self) -> None:
        self._last_fired: dict[tuple[str, AlertClass], float] = {}
        self._completed: set[str] = set()

    def __len__(self) -> int:
        return len(self._last_fired)

    def last_fired(self, task_id: str, alert_class: AlertClass) -> float | None:
        return self._last_fired.get((task_id, alert_class))

    def can_fire(
        self,
        task_id: str,
        alert_class: AlertClass,
        min_interval_minutes: float,
        now_ts: float,
    ) -> bool:
        last = self._last_fired.get((task_id, alert_class))
        if last is None:
            return True
        return (now_ts - last) >= float(min_interval_minutes) * 60.0

    def mark_fired(self, task_id: str, alert_class: AlertClass, now_ts: float) -> None:
        self._last_fired[(task_id, alert_class)] = float(now_ts)

    def forget_task(self, task_id: str) -> int:
        keys = [k for k in self._last_fired if k[0] == task_id]
        for k in keys:
            del self._last_fired[k]
        return len(keys)

    def mark_completed(self, task_id: str) -> bool:
        """Drop the task's cooldowns and suppress it for good. True on first sight."""
        self.forget_task(task_id)
        if task_id in self._completed:
            return False
        self._completed.add(task_id)
        logger.debug("Task %s completed; alerts suppressed", task_id)
        return True

    def is_completed(self, task_id: str) -> bool:
        return task_id in self._completed

    @property
    def completed_ids(self) -> frozenset[str]:
        return frozenset(self._completed)

    def prune(self, now_ts: float, max_age_seconds: float = DAY_SECONDS) -> int:
        cutoff = now_ts - max_age_seconds
        stale = [k for k, ts in self._last_fired.items() if ts < cutoff]
        for k in stale:
            del self._last_fired[k]
        return len(stale)

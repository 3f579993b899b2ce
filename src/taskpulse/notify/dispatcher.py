# src/taskpulse/notify/dispatcher.py

from __future__ import annotations

import logging

from ..core.ports import NotificationSink
from .alert_models import Alert


class Dispatcher:
    """
    Best-effort delivery through the notification sink.

    One attempt per alert per tick. Failures are logged and not retried;
    delivery problems are the sink's concern.
    """

    def __init__(self, sink: NotificationSink, *, logger: logging.Logger | None = None) -> None:
        self._sink = sink
        self._log = logger or logging.getLogger(__name__)

    async def dispatch(self, alert: Alert) -> bool:
        try:
            await self._sink.notify(title=alert.title, body=alert.body, tag=alert.tag)
        except Exception:
            self._log.exception(
                "notify failed task_id=%s class=%s tag=%s",
                alert.task_id,
                alert.alert_class.value,
                alert.tag,
            )
            return False

        self._log.info("Alert sent task_id=%s class=%s", alert.task_id, alert.alert_class.value)
        return True

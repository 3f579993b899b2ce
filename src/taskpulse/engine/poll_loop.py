# src/taskpulse/engine/poll_loop.py

from __future__ import annotations

"""
Poll loop.

Runs the engine once immediately on activation, then every interval_seconds.
The loop only exists while alerts are permitted: losing the permission tears
it down, regaining it starts a fresh loop (with an immediate pass).

Passes are sequential inside a single asyncio task, so they never overlap.
"""

import asyncio
import logging

from ..core.ports import PERMISSION_GRANTED, AuthorizationGate
from .engine import NotificationEngine

logger = logging.getLogger(__name__)


class PollLoop:
    def __init__(self, engine: NotificationEngine, *, interval_seconds: float = 30.0) -> None:
        self.engine = engine
        self.interval_seconds = max(0.01, float(interval_seconds))
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self.engine.activate()
        self._task = asyncio.get_running_loop().create_task(self._run(), name="taskpulse-poll-loop")
        logger.info("Poll loop started interval=%ss", self.interval_seconds)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Poll loop stopped")

    async def set_permission(self, permission: str | None) -> None:
        """Start on "granted", tear down on anything else."""
        if permission == PERMISSION_GRANTED:
            self.start()
        elif self.running:
            logger.info("Alert permission is %r; stopping poll loop", permission)
            await self.stop()

    async def _run(self) -> None:
        while True:
            try:
                await self.engine.tick()
            except Exception:
                logger.exception("Engine tick failed")
            await asyncio.sleep(self.interval_seconds)


async def run_notification_loop(
    engine: NotificationEngine,
    gate: AuthorizationGate,
    *,
    interval_seconds: float = 30.0,
    gate_check_seconds: float = 5.0,
) -> None:
    """
    Keep a PollLoop in sync with the authorization gate.

    To stop, cancel the coroutine/task; the inner loop is torn down too.
    """
    loop = PollLoop(engine, interval_seconds=interval_seconds)
    check_s = max(0.01, float(gate_check_seconds))
    try:
        while True:
            try:
                permission = gate.permission()
            except Exception:
                logger.exception("Reading alert permission failed")
                permission = None
            await loop.set_permission(permission)
            await asyncio.sleep(check_s)
    finally:
        await loop.stop()

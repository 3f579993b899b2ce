# src/taskpulse/bootstrap.py

"""
Composition root.

The engine is embedded in a host application; this module wires the concrete
adapters (JSON task feed, JSON timer records, logging or webhook sink) from
Settings and runs the gated poll loop until cancelled.
"""

from __future__ import annotations

import logging

from .config import Settings, get_settings
from .core.ports import NotificationSink
from .engine.engine import NotificationEngine
from .engine.poll_loop import run_notification_loop
from .logging_setup import setup_logging
from .notify.sinks import LoggingSink, WebhookSink
from .storage.json_store import JsonTaskSnapshotProvider, JsonTimerRecordStore, StaticAuthorizationGate

logger = logging.getLogger(__name__)


def create_sink(settings: Settings) -> NotificationSink:
    if settings.webhook_url:
        return WebhookSink(settings.webhook_url)
    return LoggingSink()


def create_engine(settings: Settings | None = None, *, sink: NotificationSink | None = None) -> NotificationEngine:
    """
    Build an engine from settings.

    Keeping settings injectable avoids hidden global config reads in tests.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    return NotificationEngine(
        JsonTaskSnapshotProvider(settings.tasks_path),
        JsonTimerRecordStore(settings.timer_records_path),
        sink if sink is not None else create_sink(settings),
        preferences=settings.preferences(),
        max_task_minutes=settings.max_task_minutes,
        gap_minutes=settings.schedule_gap_minutes,
        grace_period_seconds=settings.grace_period_seconds,
    )


async def run(settings: Settings | None = None) -> None:
    """Host entry: logging, engine, gated poll loop. Cancel to stop."""
    if settings is None:
        settings = get_settings()

    level_name = str(settings.log_level).upper()
    setup_logging(log_dir=settings.data_dir, console_level=getattr(logging, level_name, logging.INFO))

    sink = create_sink(settings)
    engine = create_engine(settings, sink=sink)
    logger.info("Starting %s (tasks=%s timers=%s)", settings.app_name, settings.tasks_path, settings.timer_records_path)

    try:
        await run_notification_loop(
            engine,
            StaticAuthorizationGate(settings.alerts_permission),
            interval_seconds=settings.poll_interval_seconds,
        )
    finally:
        if isinstance(sink, WebhookSink):
            await sink.aclose()
        logger.info("Stopped.")

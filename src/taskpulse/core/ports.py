# src/taskpulse/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the engine.

The engine depends on Protocols instead of concrete implementations.
This keeps the task feed, timer storage and alert delivery swappable and
makes testing easier (in-memory fakes).
"""

from collections.abc import Mapping
from typing import Any, Awaitable, Protocol

from ..tasks.task_models import TaskSnapshot

PERMISSION_GRANTED = "granted"


class TaskSnapshotProvider(Protocol):
    """Current tasks with their scheduling fields. The engine never mutates them."""

    def list_tasks(self) -> list[TaskSnapshot]: ...


class TimerRecordStore(Protocol):
    """
    Read-only view of the externally owned timer records.

    Values are returned raw (mapping or JSON text); parsing is the reader's job
    so one broken record cannot break the whole load.
    """

    def load_timer_records(self) -> Mapping[str, Any]: ...


class NotificationSink(Protocol):
    """
    Delivery side: how the engine sends a user-visible alert outward.

    `tag` is advisory (replace/stack behavior of the platform); the engine
    does its own de-duplication.
    """

    def notify(self, *, title: str, body: str, tag: str) -> Awaitable[None]: ...


class AuthorizationGate(Protocol):
    """Platform permission to show alerts ("granted", "denied", "default")."""

    def permission(self) -> str: ...

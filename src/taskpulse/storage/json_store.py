# src/taskpulse/storage/json_store.py

"""
JSON-file adapters for the engine's read ports.

Both files are written by other parts of the app (task sync, timer widget),
so reads are best-effort: a missing file is an empty feed, a broken file is
logged and treated as empty. Files are re-read on every call.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..core.ports import PERMISSION_GRANTED
from ..tasks.task_models import TaskSnapshot

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text("utf-8"))
    except Exception:
        logger.exception("Failed to read JSON from %s", path)
        return None


class JsonTaskSnapshotProvider:
    """Task feed from a JSON list of task rows (or {"tasks": [...]})."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def list_tasks(self) -> list[TaskSnapshot]:
        data = _read_json(self._path)
        if isinstance(data, dict):
            data = data.get("tasks")
        if not isinstance(data, list):
            return []

        out: list[TaskSnapshot] = []
        for row in data:
            if not isinstance(row, dict):
                continue
            try:
                out.append(TaskSnapshot.from_mapping(row))
            except ValueError:
                logger.warning("Skipping task row without id in %s", self._path)
        return out


class JsonTimerRecordStore:
    """
    Timer records from a JSON object: {task_id: record}.

    Values are handed out raw; a record may itself be a JSON string (the way
    browser storage keeps it).
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load_timer_records(self) -> dict[str, Any]:
        data = _read_json(self._path)
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items()}


class StaticAuthorizationGate:
    def __init__(self, permission: str = PERMISSION_GRANTED) -> None:
        self._permission = permission

    def permission(self) -> str:
        return self._permission

    def set(self, permission: str) -> None:
        self._permission = permission

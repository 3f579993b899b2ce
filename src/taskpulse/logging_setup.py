# src/taskpulse/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Minimum console level per logger-name prefix. Unlisted loggers: errors only.
_CONSOLE_FLOORS: tuple[tuple[str, int], ...] = (
    ("taskpulse.", logging.NOTSET),
    ("httpx", logging.WARNING),
    ("httpcore", logging.WARNING),
)


class _ConsoleNoiseFilter(logging.Filter):
    """
    The engine ticks every few seconds; the console should show alerts and
    failures, not webhook request lines. The log file is unfiltered.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for prefix, floor in _CONSOLE_FLOORS:
            if record.name.startswith(prefix):
                return record.levelno >= floor
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskpulse",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route the host's logging to stderr (filtered) and <log_dir>/taskpulse.log.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate lines. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskpulse.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)
    to_file.setFormatter(fmt)

    root.addHandler(console)
    root.addHandler(to_file)

    # warnings.warn(...) lands under "py.warnings", console shows it only at ERROR.
    logging.captureWarnings(True)
    return log_file

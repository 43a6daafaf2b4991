# src/todo_reminder/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "todo_reminder.log"

_SCHEDULER_LOGGER = "todo_reminder.todos.todo_scheduler"
_SERVICE_LOGGER = "todo_reminder.core.todo_service"


def is_idle_sweep(record: logging.LogRecord) -> bool:
    """A reminder-sweep summary that moved no todos."""
    return record.name == _SERVICE_LOGGER and getattr(record, "transitioned", None) == 0


class SweepAwareConsoleFilter(logging.Filter):
    """
    Keep the interactive console readable while sweeps run in the background.

    - scheduler records and sweeps that changed nothing need `sweep_level`
    - sweeps that moved todos and other todo_reminder records pass through
    - captured Python warnings and third-party records need ERROR+
    """

    def __init__(self, sweep_level: int = logging.WARNING) -> None:
        super().__init__()
        self.sweep_level = sweep_level

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(_SCHEDULER_LOGGER) or is_idle_sweep(record):
            return record.levelno >= self.sweep_level
        if record.name.startswith("todo_reminder."):
            return True
        return record.levelno >= logging.ERROR


def _attach(root: logging.Logger, handler: logging.Handler, level: int, *filters: logging.Filter) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    for f in filters:
        handler.addFilter(f)
    root.addHandler(handler)


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo_reminder",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    sweep_console_level: int = logging.WARNING,
) -> Path:
    """
    Install a filtered stderr handler and an unfiltered file handler on the
    root logger, replacing any handlers already there. Returns the log file path.

    Call once, before the first record is emitted.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    _attach(root, logging.StreamHandler(sys.stderr), console_level, SweepAwareConsoleFilter(sweep_console_level))
    _attach(root, logging.FileHandler(str(log_file), encoding="utf-8"), file_level)

    logging.captureWarnings(True)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return log_file

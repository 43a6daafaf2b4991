# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from todo_reminder.logging_setup import LOG_FILE_NAME, SweepAwareConsoleFilter, setup_logging


def _record(name: str, level: int, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(name, level, __file__, 1, "msg", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_idle_sweeps_and_scheduler_follow_sweep_level() -> None:
    quiet = SweepAwareConsoleFilter(logging.WARNING)
    chatty = SweepAwareConsoleFilter(logging.INFO)

    idle = _record("todo_reminder.core.todo_service", logging.INFO, transitioned=0)
    busy = _record("todo_reminder.core.todo_service", logging.INFO, transitioned=2)
    tick = _record("todo_reminder.todos.todo_scheduler", logging.INFO)
    failed_run = _record("todo_reminder.todos.todo_scheduler", logging.ERROR)

    assert not quiet.filter(idle)
    assert quiet.filter(busy)
    assert not quiet.filter(tick)
    assert quiet.filter(failed_run)
    assert chatty.filter(idle)
    assert chatty.filter(tick)


def test_third_party_records_need_error() -> None:
    f = SweepAwareConsoleFilter()
    assert f.filter(_record("todo_reminder.cli.main", logging.INFO))
    assert not f.filter(_record("asyncio", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("asyncio", logging.ERROR))


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path, console_level=logging.CRITICAL)
        logging.getLogger("todo_reminder.test").debug("hello file")
        for h in root.handlers:
            h.flush()

        assert log_file == tmp_path / LOG_FILE_NAME
        assert "hello file" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)

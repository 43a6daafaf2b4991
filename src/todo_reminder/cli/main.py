# src/todo_reminder/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, registers the recurring reminder
sweep, then runs the console REPL (or idles until a signal when the
console is disabled).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import signal
import sys

from ..cli.bootstrap import create_initial_state, start_reminder_sweeps
from ..config import get_settings
from ..connectors.console_connector import input_pending, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    task_name = start_reminder_sweeps(state)
    logger.info(
        "Reminder sweep %r every %ss",
        task_name,
        getattr(settings, "reminder_interval_seconds", "?"),
    )

    # Use an Event so we can wait without a busy loop.
    stop_main = asyncio.Event()
    loop = asyncio.get_running_loop()

    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not every platform supports loop signal handlers (e.g. Windows).
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, _handle_signal, sig)

    try:
        if settings.console_enabled:
            console = asyncio.create_task(run_console_loop(state))
            stopper = asyncio.create_task(stop_main.wait())
            await asyncio.wait({console, stopper}, return_when=asyncio.FIRST_COMPLETED)
            stopper.cancel()
            console.cancel()
        else:
            logger.info("Console disabled. Running reminder sweeps only. Press Ctrl+C to stop.")
            await stop_main.wait()
    finally:
        state.scheduler.stop_all()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    sweep_level_name = str(getattr(settings, "sweep_log_level", "WARNING")).upper()
    sweep_console_level = getattr(logging, sweep_level_name, logging.WARNING)

    setup_logging(
        log_dir=getattr(settings, "data_dir", ".local/todo_reminder"),
        console_level=console_level,
        sweep_console_level=sweep_console_level,
    )

    logger.info("Starting %s...", getattr(settings, "app_name", "todo-reminder"))
    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        pass
    logger.info("Bye.")

    if input_pending():
        # A daemon reader is still blocked in input(); interpreter teardown
        # would contend with it for the stdin lock, so skip teardown.
        logging.shutdown()
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(0)


if __name__ == "__main__":
    main()

# src/todo_reminder/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

# Daemon thread currently blocked in input(), if any.
_reader_thread: threading.Thread | None = None


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def input_pending() -> bool:
    """True while a console read is still blocked on stdin."""
    return _reader_thread is not None and _reader_thread.is_alive()


def _read_line(prompt: str) -> asyncio.Future[str]:
    """
    Read one line from stdin on a daemon thread.

    Not the loop's default executor: asyncio.run() joins executor threads on
    shutdown, and a thread stuck in input() would keep the process alive
    after Ctrl+C / SIGTERM.
    """
    global _reader_thread

    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _deliver(line: str | None, error: BaseException | None) -> None:
        if fut.done():
            return
        if error is not None:
            fut.set_exception(error)
        else:
            fut.set_result(line or "")

    def _reader() -> None:
        try:
            line = input(prompt)
        except (Exception, KeyboardInterrupt) as e:
            with contextlib.suppress(RuntimeError):  # loop already closed
                loop.call_soon_threadsafe(_deliver, None, e)
            return
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_deliver, line, None)

    _reader_thread = threading.Thread(target=_reader, name="console-input", daemon=True)
    _reader_thread.start()
    return fut


async def run_console_loop(state: AppState) -> None:
    """
    Interactive REPL on the running event loop.

    input() blocks, so each read happens on a daemon thread; commands run on
    the loop, interleaved with the scheduler's reminder sweeps.
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = (await _read_line(">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = await command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list them."

        _print_ts(response)

    logger.info("Console connector finished.")

# src/todo_reminder/todos/todo_scheduler.py

from __future__ import annotations

"""
Recurring task scheduler.

Runs named callbacks on a fixed interval on the current asyncio loop:
- at most one timer per name (re-registering replaces the old one),
- every run is isolated: an exception is logged and the timer keeps going,
- by default a tick is skipped while the previous run of the same task is
  still in flight (pass allow_overlap=True to fire regardless).

The scheduler owns its timer tasks; stop(name) / stop_all() are the only
cancellation primitives.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass, field

from ..core.ports import RecurringCallback

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Registration:
    name: str
    interval_seconds: float
    callback: RecurringCallback
    allow_overlap: bool
    timer: asyncio.Task[None] | None = None
    in_flight: set[asyncio.Task[None]] = field(default_factory=set)


class RecurringScheduler:
    def __init__(self) -> None:
        self._registrations: dict[str, _Registration] = {}

    def schedule_recurring(
        self,
        name: str,
        interval_seconds: float,
        callback: RecurringCallback,
        *,
        allow_overlap: bool = False,
    ) -> None:
        """
        Run `callback` every `interval_seconds` under `name`.

        Must be called while an event loop is running. The first run happens
        one interval after registration.
        """
        if not name:
            raise ValueError("name is required")
        interval = float(interval_seconds)
        if interval <= 0:
            raise ValueError("interval_seconds must be positive")

        if name in self._registrations:
            self.stop(name)
            logger.warning('Replacing existing recurring task "%s"', name)

        reg = _Registration(
            name=name,
            interval_seconds=interval,
            callback=callback,
            allow_overlap=allow_overlap,
        )
        reg.timer = asyncio.get_running_loop().create_task(
            self._tick_loop(reg), name=f"recurring:{name}"
        )
        self._registrations[name] = reg
        logger.info("Recurring task %s scheduled every %.3fs", name, interval)

    def stop(self, name: str) -> None:
        """Cancel the timer for `name`. Runs already in flight finish on their own."""
        reg = self._registrations.pop(name, None)
        if reg is None:
            return
        if reg.timer is not None:
            reg.timer.cancel()
        logger.info("Recurring task %s stopped", name)

    def stop_all(self) -> None:
        for name in list(self._registrations):
            self.stop(name)

    def is_scheduled(self, name: str) -> bool:
        return name in self._registrations

    def names(self) -> list[str]:
        return list(self._registrations)

    # ---- internals ----

    async def _tick_loop(self, reg: _Registration) -> None:
        while True:
            await asyncio.sleep(reg.interval_seconds)

            if reg.in_flight and not reg.allow_overlap:
                logger.warning(
                    'Skipping run of "%s": previous run still in progress', reg.name
                )
                continue

            run = asyncio.get_running_loop().create_task(
                self._run_once(reg), name=f"recurring-run:{reg.name}"
            )
            reg.in_flight.add(run)
            run.add_done_callback(reg.in_flight.discard)

    @staticmethod
    async def _run_once(reg: _Registration) -> None:
        try:
            result = reg.callback()
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception('Error while running task "%s"', reg.name)

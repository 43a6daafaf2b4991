# src/todo_reminder/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- picks the repository implementations,
- wires stores, service and scheduler into AppState,
- registers the periodic reminder sweep.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import get_settings
from ..core.state import AppState
from ..core.todo_service import TodoService
from ..todos.todo_models import Clock, utc_now
from ..todos.todo_scheduler import RecurringScheduler
from ..todos.todo_store import InMemoryTodoStore
from ..todos.user_store import InMemoryUserStore

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_TASK = "reminder-check"


@dataclass(slots=True)
class RepositoryBundle:
    todo_store: InMemoryTodoStore
    user_store: InMemoryUserStore


def create_repositories(kind: str | None, *, clock: Clock = utc_now) -> RepositoryBundle:
    """
    Build the repository pair for `kind`.

    Only "memory" exists today; unknown kinds fall back to it so new
    backends can be added here without touching the app wiring.
    """
    normalized = (kind or "memory").strip().lower()
    if normalized != "memory":
        logger.warning("Unknown repository kind %r; falling back to memory", kind)

    return RepositoryBundle(
        todo_store=InMemoryTodoStore(clock=clock),
        user_store=InMemoryUserStore(clock=clock),
    )


def create_initial_state(*, settings=None, clock: Clock = utc_now) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    repos = create_repositories(getattr(settings, "repository_kind", "memory"), clock=clock)
    service = TodoService(repos.todo_store, repos.user_store, clock=clock)

    return AppState(
        settings=settings,
        todo_store=repos.todo_store,
        user_store=repos.user_store,
        service=service,
        scheduler=RecurringScheduler(),
    )


def start_reminder_sweeps(state: AppState) -> str:
    """
    Register the periodic reminder sweep on state.scheduler.

    Must run inside the event loop. Returns the task name used.
    """
    name = str(getattr(state.settings, "reminder_task_name", "") or DEFAULT_REMINDER_TASK)
    interval = float(getattr(state.settings, "reminder_interval_seconds", 60.0))

    state.scheduler.schedule_recurring(name, interval, state.service.process_reminders)
    return name

# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest
import pytest_asyncio

from todo_reminder.cli.bootstrap import create_initial_state
from todo_reminder.core.state import AppState
from todo_reminder.core.todo_service import TodoService
from todo_reminder.todos.todo_models import User
from todo_reminder.todos.user_store import InMemoryUserStore

from .fakes import FakeClock, RecordingTodoStore


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def todo_store(clock: FakeClock) -> RecordingTodoStore:
    return RecordingTodoStore(clock=clock)


@pytest.fixture()
def user_store(clock: FakeClock) -> InMemoryUserStore:
    return InMemoryUserStore(clock=clock)


@pytest.fixture()
def service(
    todo_store: RecordingTodoStore, user_store: InMemoryUserStore, clock: FakeClock
) -> TodoService:
    return TodoService(todo_store, user_store, clock=clock)


@pytest_asyncio.fixture()
async def user(user_store: InMemoryUserStore) -> User:
    return await user_store.create(email="u1@example.com", name="User One")


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-reminder-test",
        repository_kind="memory",
        reminder_task_name="reminder-check",
        reminder_interval_seconds=60.0,
        console_enabled=False,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """AppState wired through the real composition root, with a fake clock."""
    return create_initial_state(settings=settings, clock=clock)

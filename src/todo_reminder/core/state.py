# src/todo_reminder/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..todos.todo_scheduler import RecurringScheduler
from ..todos.todo_store import InMemoryTodoStore
from ..todos.user_store import InMemoryUserStore
from .todo_service import TodoService


@dataclass
class AppState:
    # Settings object (real Settings or a test double with the same attributes).
    settings: object

    todo_store: InMemoryTodoStore
    user_store: InMemoryUserStore
    service: TodoService
    scheduler: RecurringScheduler

# src/todo_reminder/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TodoService depends on these Protocols instead of concrete stores, so the
in-memory implementations can be swapped for a real backing store.

Store methods are coroutines even though the in-memory stores never
suspend: a database-backed store can then be substituted without
changing callers. Implementations with real parallelism must serialize
writes to the same todo (per-id lock or compare-and-swap on updated_at)
to keep updated_at strictly increasing.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol

from ..todos.todo_models import Todo, TodoStatus, User

# May return an awaitable, which the scheduler then awaits.
RecurringCallback = Callable[[], Any]


class TodoRepo(Protocol):
    async def create(
            self,
            *,
            user_id: str,
            title: str,
            description: str | None = None,
            status: TodoStatus = TodoStatus.PENDING,
            remind_at: datetime | str | None = None,
    ) -> Todo: ...

    async def update(
            self,
            todo_id: str,
            *,
            updated_at: datetime | None = None,
            **changes: Any,
    ) -> Todo | None: ...

    async def find_by_id(self, todo_id: str) -> Todo | None: ...
    async def find_by_user_id(self, user_id: str) -> list[Todo]: ...
    async def find_due_reminders(self, current_time: datetime) -> list[Todo]: ...


class UserRepo(Protocol):
    """Lookup capability consumed by TodoService."""

    async def find_by_id(self, user_id: str) -> User | None: ...

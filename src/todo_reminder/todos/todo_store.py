# src/todo_reminder/todos/todo_store.py

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from .todo_models import Clock, Todo, TodoStatus, parse_instant, utc_now

logger = logging.getLogger(__name__)

# Smallest step datetime can represent; used to break updated_at ties.
_TICK = timedelta(microseconds=1)

_UPDATABLE_FIELDS = frozenset({"title", "description", "status", "remind_at", "deleted_at"})

# Updatable but never clearable.
_REQUIRED_FIELDS = frozenset({"title", "status"})


class InMemoryTodoStore:
    """
    In-memory todo store.

    Records live in a list so every query preserves insertion order.
    Nothing stored is ever handed out: reads and writes go through copies,
    so callers cannot mutate stored state by reference.

    Concurrency:
    - safe under a single event loop because no method suspends between
      reading and writing a record
    """

    def __init__(self, *, clock: Clock = utc_now) -> None:
        self._todos: list[Todo] = []
        self._id_counter = 0
        self._clock = clock
        logger.info("InMemoryTodoStore ready total=%s", self.count_todos())

    # ---- low-level helpers ----

    def _index_of(self, todo_id: str) -> int:
        for i, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return i
        return -1

    def _next_updated_at(self, previous: datetime, requested: datetime | None) -> datetime:
        candidate = requested if requested is not None else self._clock()
        if candidate <= previous:
            return previous + _TICK
        return candidate

    # ---- public API ----

    def count_todos(self) -> int:
        return len(self._todos)

    async def create(
        self,
        *,
        user_id: str,
        title: str,
        description: str | None = None,
        status: TodoStatus = TodoStatus.PENDING,
        remind_at: datetime | str | None = None,
    ) -> Todo:
        self._id_counter += 1
        now = self._clock()

        todo = Todo(
            id=f"todo-{self._id_counter}",
            user_id=user_id,
            title=title,
            description=description,
            status=TodoStatus(status),
            remind_at=parse_instant(remind_at) if remind_at is not None else None,
            deleted_at=None,
            created_at=now,
            updated_at=now,
        )
        self._todos.append(todo)
        logger.debug(
            "Todo added id=%s user_id=%s status=%s remind_at=%s",
            todo.id,
            user_id,
            todo.status.value,
            todo.remind_at,
        )
        return replace(todo)

    async def update(
        self,
        todo_id: str,
        *,
        updated_at: datetime | None = None,
        **changes: Any,
    ) -> Todo | None:
        """
        Merge `changes` into an existing todo.

        Returns None when the id is unknown; never creates a record.
        updated_at always moves strictly forward: a supplied (or clock)
        value that is not after the stored one becomes previous + 1us.
        """
        rejected = set(changes) - _UPDATABLE_FIELDS
        if rejected:
            raise ValueError(f"Cannot update todo fields: {', '.join(sorted(rejected))}")
        cleared = sorted(k for k in _REQUIRED_FIELDS if k in changes and changes[k] is None)
        if cleared:
            raise ValueError(f"Todo fields cannot be None: {', '.join(cleared)}")

        index = self._index_of(todo_id)
        if index == -1:
            return None

        if "status" in changes:
            changes["status"] = TodoStatus(changes["status"])
        if changes.get("remind_at") is not None:
            changes["remind_at"] = parse_instant(changes["remind_at"])

        current = self._todos[index]
        updated = replace(
            current,
            **changes,
            updated_at=self._next_updated_at(current.updated_at, updated_at),
        )
        self._todos[index] = updated
        logger.debug("Todo updated id=%s fields=%s", todo_id, sorted(changes))
        return replace(updated)

    async def find_by_id(self, todo_id: str) -> Todo | None:
        index = self._index_of(todo_id)
        return replace(self._todos[index]) if index != -1 else None

    async def find_by_user_id(self, user_id: str) -> list[Todo]:
        """All todos owned by `user_id`, soft-deleted ones included."""
        return [replace(t) for t in self._todos if t.user_id == user_id]

    async def find_due_reminders(self, current_time: datetime) -> list[Todo]:
        """
        PENDING todos whose remind_at is set and not after `current_time`.

        Soft-deleted todos are not filtered here; that is the caller's policy.
        """
        current_time = parse_instant(current_time)
        return [
            replace(t)
            for t in self._todos
            if t.status == TodoStatus.PENDING
            and t.remind_at is not None
            and t.remind_at <= current_time
        ]

# src/todo_reminder/core/todo_service.py

from __future__ import annotations

"""
Todo lifecycle service.

Validates input, checks that referenced users and todos exist, and owns the
status state machine:

    PENDING --(reminder sweep)--> REMINDER_DUE
    PENDING / REMINDER_DUE --(complete_todo)--> DONE

Soft deletion (deleted_at) is orthogonal to status and allowed in any state.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime

from ..todos.todo_models import Clock, Todo, TodoStatus, parse_instant, utc_now
from .errors import NotFoundError, ValidationError
from .ports import TodoRepo, UserRepo

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ReminderSweepSummary:
    swept_at: datetime
    candidates: int
    transitioned: int
    duration_ms: float


class TodoService:
    def __init__(self, todo_repo: TodoRepo, user_repo: UserRepo, *, clock: Clock = utc_now) -> None:
        self._todos = todo_repo
        self._users = user_repo
        self._clock = clock

    async def create_todo(
        self,
        user_id: str,
        title: str,
        description: str | None = None,
        remind_at: datetime | str | None = None,
    ) -> Todo:
        if not user_id:
            raise ValidationError("userId is required")

        trimmed_title = title.strip() if isinstance(title, str) else ""
        if not trimmed_title:
            raise ValidationError("title must be a non-empty string")

        parsed_remind_at = self._parse_remind_at(remind_at)

        user = await self._users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found")

        todo = await self._todos.create(
            user_id=user_id,
            title=trimmed_title,
            description=description,
            status=TodoStatus.PENDING,
            remind_at=parsed_remind_at,
        )
        logger.info("Todo created id=%s user_id=%s remind_at=%s", todo.id, user_id, todo.remind_at)
        return todo

    async def complete_todo(self, todo_id: str) -> Todo:
        """Mark a todo DONE. Completing an already DONE todo returns it untouched."""
        todo = await self._require_todo(todo_id)

        if todo.status == TodoStatus.DONE:
            return todo

        updated = await self._todos.update(todo_id, status=TodoStatus.DONE, updated_at=self._clock())
        if updated is None:
            # Only possible if the record vanished between lookup and write.
            raise NotFoundError(f"Todo with id {todo_id} not found")

        logger.info("Todo %s -> done", todo_id)
        return updated

    async def get_todos_by_user(
        self,
        user_id: str,
        *,
        limit: int | None = None,
        offset: int = 0,
        include_deleted: bool = False,
    ) -> list[Todo]:
        """
        Todos owned by `user_id` in creation order.

        Soft-deleted todos are dropped unless include_deleted is set; then
        offset (clamped to >= 0) and limit (None = everything left) slice
        the filtered sequence.
        """
        if not user_id:
            raise ValidationError("userId is required")

        todos = await self._todos.find_by_user_id(user_id)
        if not include_deleted:
            todos = [t for t in todos if not t.is_deleted]

        start = max(0, int(offset))
        if limit is None:
            return todos[start:]
        return todos[start : start + max(0, int(limit))]

    async def delete_todo(self, todo_id: str) -> Todo:
        """
        Soft-delete a todo.

        Deleting an already deleted todo succeeds again and re-stamps deleted_at.
        """
        await self._require_todo(todo_id)

        now = self._clock()
        updated = await self._todos.update(todo_id, deleted_at=now, updated_at=now)
        if updated is None:
            raise NotFoundError(f"Todo with id {todo_id} not found")

        logger.info("Todo %s soft-deleted", todo_id)
        return updated

    async def process_reminders(self, current_time: datetime | None = None) -> ReminderSweepSummary:
        """
        Move every due, still-PENDING, non-deleted todo to REMINDER_DUE.

        Each candidate is re-read before the write, so todos already moved by
        an overlapping sweep (or deleted in between) are skipped. Running the
        sweep twice for the same instant changes nothing the second time.
        """
        started = time.perf_counter()
        swept_at = parse_instant(current_time) if current_time is not None else self._clock()

        due = await self._todos.find_due_reminders(swept_at)
        transitioned = 0

        for candidate in due:
            current = await self._todos.find_by_id(candidate.id)
            if current is None or current.status != TodoStatus.PENDING or current.is_deleted:
                continue

            updated = await self._todos.update(
                candidate.id,
                status=TodoStatus.REMINDER_DUE,
                updated_at=self._clock(),
            )
            if updated is not None:
                transitioned += 1
                logger.debug("Todo %s -> reminder_due", candidate.id)

        summary = ReminderSweepSummary(
            swept_at=swept_at,
            candidates=len(due),
            transitioned=transitioned,
            duration_ms=(time.perf_counter() - started) * 1000.0,
        )
        logger.info(
            "Reminder sweep at=%s candidates=%d transitioned=%d duration_ms=%.2f",
            summary.swept_at.isoformat(),
            summary.candidates,
            summary.transitioned,
            summary.duration_ms,
            extra={
                "swept_at": summary.swept_at.isoformat(),
                "candidates": summary.candidates,
                "transitioned": summary.transitioned,
                "duration_ms": summary.duration_ms,
            },
        )
        return summary

    # ---- helpers ----

    async def _require_todo(self, todo_id: str) -> Todo:
        if not todo_id:
            raise ValidationError("todoId is required")

        todo = await self._todos.find_by_id(todo_id)
        if todo is None:
            raise NotFoundError(f"Todo with id {todo_id} not found")
        return todo

    @staticmethod
    def _parse_remind_at(remind_at: datetime | str | None) -> datetime | None:
        if remind_at is None:
            return None
        try:
            return parse_instant(remind_at)
        except (ValueError, OverflowError) as e:
            raise ValidationError("remindAt must be a valid date") from e

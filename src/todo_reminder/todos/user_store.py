# src/todo_reminder/todos/user_store.py

from __future__ import annotations

import logging
from dataclasses import replace

from .todo_models import Clock, User, utc_now

logger = logging.getLogger(__name__)


class InMemoryUserStore:
    """In-memory user store; TodoService only needs find_by_id from it."""

    def __init__(self, *, clock: Clock = utc_now) -> None:
        self._users: dict[str, User] = {}
        self._id_counter = 0
        self._clock = clock

    async def create(self, *, email: str, name: str) -> User:
        email = (email or "").strip()
        name = (name or "").strip()
        if not email:
            raise ValueError("email is required")
        if not name:
            raise ValueError("name is required")

        self._id_counter += 1
        user = User(
            id=f"user-{self._id_counter}",
            email=email,
            name=name,
            created_at=self._clock(),
        )
        self._users[user.id] = user
        logger.debug("User added id=%s email=%s", user.id, email)
        return replace(user)

    async def find_by_id(self, user_id: str) -> User | None:
        user = self._users.get(user_id)
        return replace(user) if user else None

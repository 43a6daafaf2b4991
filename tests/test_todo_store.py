# tests/test_todo_store.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from todo_reminder.todos.todo_models import TodoStatus
from todo_reminder.todos.todo_store import InMemoryTodoStore

from .fakes import T0, FakeClock


@pytest.fixture()
def store(clock: FakeClock) -> InMemoryTodoStore:
    return InMemoryTodoStore(clock=clock)


@pytest.mark.asyncio
async def test_create_assigns_ids_and_timestamps(store: InMemoryTodoStore) -> None:
    first = await store.create(user_id="u1", title="Buy milk", remind_at="2026-01-01T10:00:00Z")
    second = await store.create(user_id="u1", title="Call mom")

    assert first.id == "todo-1"
    assert second.id == "todo-2"
    assert first.status == TodoStatus.PENDING
    assert first.created_at == first.updated_at == T0
    assert first.remind_at == datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert second.remind_at is None
    assert first.deleted_at is None
    assert store.count_todos() == 2


@pytest.mark.asyncio
async def test_update_unknown_id_returns_none_and_creates_nothing(store: InMemoryTodoStore) -> None:
    assert await store.update("todo-404", status=TodoStatus.DONE) is None
    assert await store.find_by_id("todo-404") is None
    assert store.count_todos() == 0


@pytest.mark.asyncio
async def test_updates_with_same_timestamp_stay_strictly_increasing(store: InMemoryTodoStore) -> None:
    todo = await store.create(user_id="u1", title="t")

    stamps = [todo.updated_at]
    for _ in range(3):
        updated = await store.update(todo.id, description="x", updated_at=T0)
        assert updated is not None
        stamps.append(updated.updated_at)

    assert stamps == sorted(stamps)
    assert len(set(stamps)) == len(stamps)
    assert stamps[-1] == T0 + timedelta(microseconds=3)


@pytest.mark.asyncio
async def test_update_without_timestamp_uses_clock(store: InMemoryTodoStore, clock: FakeClock) -> None:
    todo = await store.create(user_id="u1", title="t")
    later = clock.advance(minutes=5)

    updated = await store.update(todo.id, status=TodoStatus.DONE)

    assert updated is not None
    assert updated.updated_at == later
    assert updated.status == TodoStatus.DONE
    assert updated.created_at == T0


@pytest.mark.asyncio
async def test_update_keeps_later_supplied_timestamp(store: InMemoryTodoStore) -> None:
    todo = await store.create(user_id="u1", title="t")
    supplied = T0 + timedelta(hours=1)

    updated = await store.update(todo.id, title="t2", updated_at=supplied)

    assert updated is not None
    assert updated.updated_at == supplied


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["id", "user_id", "created_at", "colour"])
async def test_update_rejects_immutable_and_unknown_fields(store: InMemoryTodoStore, field: str) -> None:
    todo = await store.create(user_id="u1", title="t")

    with pytest.raises(ValueError):
        await store.update(todo.id, **{field: "changed"})

    assert await store.find_by_id(todo.id) == todo


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "changes",
    [
        {"status": None},
        {"title": None},
        {"status": None, "title": None},
        {"status": "ARCHIVED"},
    ],
)
async def test_update_rejects_clearing_or_invalid_required_fields(
    store: InMemoryTodoStore, changes: dict[str, object]
) -> None:
    todo = await store.create(user_id="u1", title="t")

    with pytest.raises(ValueError):
        await store.update(todo.id, **changes)

    stored = await store.find_by_id(todo.id)
    assert stored == todo
    assert stored.status == TodoStatus.PENDING
    assert stored.title == "t"


@pytest.mark.asyncio
async def test_update_can_clear_optional_fields(store: InMemoryTodoStore) -> None:
    todo = await store.create(user_id="u1", title="t", description="d", remind_at=T0)

    updated = await store.update(todo.id, description=None, remind_at=None)

    assert updated is not None
    assert updated.description is None
    assert updated.remind_at is None
    assert updated.status == TodoStatus.PENDING


@pytest.mark.asyncio
async def test_find_by_user_id_keeps_insertion_order_and_deleted(store: InMemoryTodoStore) -> None:
    a = await store.create(user_id="u1", title="a")
    await store.create(user_id="u2", title="other")
    b = await store.create(user_id="u1", title="b")
    await store.update(a.id, deleted_at=T0)

    todos = await store.find_by_user_id("u1")

    assert [t.id for t in todos] == [a.id, b.id]
    assert todos[0].deleted_at == T0


@pytest.mark.asyncio
async def test_find_due_reminders_selects_pending_and_elapsed(store: InMemoryTodoStore) -> None:
    past = await store.create(user_id="u1", title="past", remind_at=T0 - timedelta(minutes=1))
    exact = await store.create(user_id="u1", title="exact", remind_at=T0)
    await store.create(user_id="u1", title="future", remind_at=T0 + timedelta(minutes=1))
    await store.create(user_id="u1", title="no reminder")
    done = await store.create(user_id="u1", title="done", remind_at=T0 - timedelta(minutes=5))
    await store.update(done.id, status=TodoStatus.DONE)

    due = await store.find_due_reminders(T0)

    assert [t.id for t in due] == [past.id, exact.id]


@pytest.mark.asyncio
async def test_returned_records_are_copies(store: InMemoryTodoStore) -> None:
    created = await store.create(user_id="u1", title="original")
    created.title = "mutated"

    fetched = await store.find_by_id(created.id)
    assert fetched is not None
    assert fetched.title == "original"

    fetched.status = TodoStatus.DONE
    listed = await store.find_by_user_id("u1")
    assert listed[0].status == TodoStatus.PENDING

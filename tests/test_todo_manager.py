"""
Tests for the Todo Manager component.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from todoapi.storage.base import TaskStore
from todoapi.todo_manager import Difficulty, Task, TaskResourceManager
from todoapi.utils.error_handling import IntegrityFault, TaskNotFound


@pytest.fixture
def manager(task_store):
    return TaskResourceManager(task_store)


@pytest.fixture
def sample_task(alice):
    return Task(
        user_id=alice.id,
        title="water plants",
        description="the ones on the balcony",
        difficulty=Difficulty.EASY
    )


@pytest.mark.asyncio
async def test_create_and_get(manager, alice, bob):
    """Test creating a task and reading it back as its owner only."""
    created = await manager.create(alice.id, "buy milk", "semi-skimmed", Difficulty.EASY)

    fetched = await manager.get_owned(created.id, alice.id)
    assert fetched.is_done is False
    assert fetched.user_id == alice.id
    assert fetched.title == "buy milk"
    assert fetched.description == "semi-skimmed"
    assert fetched.difficulty == Difficulty.EASY

    with pytest.raises(TaskNotFound):
        await manager.get_owned(created.id, bob.id)


@pytest.mark.asyncio
async def test_get_owned_missing(manager, alice):
    """Test reading a task that does not exist."""
    with pytest.raises(TaskNotFound) as exc_info:
        await manager.get_owned("missing", alice.id)

    assert str(exc_info.value) == "Todo item with id: 'missing' does not exist"


@pytest.mark.asyncio
async def test_foreign_task_looks_missing(manager, task_store, sample_task, bob):
    """Test that another owner's task fails exactly like a missing one."""
    await task_store.upsert(sample_task)

    with pytest.raises(TaskNotFound) as foreign:
        await manager.get_owned(sample_task.id, bob.id)
    with pytest.raises(TaskNotFound) as missing:
        await manager.get_owned("missing", bob.id)

    assert type(foreign.value) is type(missing.value)
    assert str(foreign.value) == f"Todo item with id: '{sample_task.id}' does not exist"


@pytest.mark.asyncio
async def test_get_owned_queries_by_id_and_owner(alice):
    """Test that the store is asked for the (task, owner) pair."""
    task_store = MagicMock(spec=TaskStore)
    task_store.find = AsyncMock(return_value=None)
    manager = TaskResourceManager(task_store)

    with pytest.raises(TaskNotFound):
        await manager.get_owned("task-1", alice.id)

    task_store.find.assert_awaited_once_with("task-1", alice.id)


@pytest.mark.asyncio
async def test_list_owned(manager, alice, bob):
    """Test listing returns only the owner's tasks."""
    await manager.create(alice.id, "one", "", Difficulty.EASY)
    await manager.create(alice.id, "two", "", Difficulty.HARD)
    await manager.create(bob.id, "three", "", Difficulty.NORMAL)

    tasks = await manager.list_owned(alice.id)

    assert sorted(t.title for t in tasks) == ["one", "two"]
    assert await manager.list_owned("nobody") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("rows_affected", [0, 2, 17])
async def test_create_integrity_fault(alice, rows_affected):
    """Test that any affected-row count but one is a fatal fault."""
    task_store = MagicMock(spec=TaskStore)
    task_store.upsert = AsyncMock(return_value=rows_affected)
    manager = TaskResourceManager(task_store)

    with pytest.raises(IntegrityFault) as exc_info:
        await manager.create(alice.id, "title", "description", Difficulty.NORMAL)

    assert str(exc_info.value) == "Something went wrong"
    saved = task_store.upsert.await_args.args[0]
    assert saved.user_id == alice.id
    assert saved.is_done is False


@pytest.mark.asyncio
async def test_update(manager, task_store, sample_task, alice):
    """Test overwriting the editable fields."""
    await task_store.upsert(sample_task)

    updated = await manager.update(sample_task.id, alice.id, "repot plants", "bigger pots", Difficulty.HARD)

    assert updated.title == "repot plants"
    assert updated.description == "bigger pots"
    assert updated.difficulty == Difficulty.HARD
    assert updated.id == sample_task.id
    assert updated.created_at == sample_task.created_at

    stored = await task_store.find(sample_task.id, alice.id)
    assert stored == updated


@pytest.mark.asyncio
async def test_update_foreign_task(manager, task_store, sample_task, alice, bob):
    """Test that updating another owner's task fails and changes nothing."""
    await task_store.upsert(sample_task)

    with pytest.raises(TaskNotFound):
        await manager.update(sample_task.id, bob.id, "hijacked", "", Difficulty.EASY)

    assert (await task_store.find(sample_task.id, alice.id)).title == "water plants"


@pytest.mark.asyncio
async def test_toggle_done_twice_restores(manager, task_store, sample_task, alice):
    """Test that toggling is its own inverse."""
    await task_store.upsert(sample_task)

    first = await manager.toggle_done(sample_task.id, alice.id)
    assert first.is_done is True
    assert (await task_store.find(sample_task.id, alice.id)).is_done is True

    second = await manager.toggle_done(sample_task.id, alice.id)
    assert second.is_done is False
    assert (await task_store.find(sample_task.id, alice.id)).is_done is False


@pytest.mark.asyncio
async def test_toggle_done_foreign_task(manager, task_store, sample_task, bob):
    """Test toggling another owner's task."""
    await task_store.upsert(sample_task)

    with pytest.raises(TaskNotFound):
        await manager.toggle_done(sample_task.id, bob.id)


@pytest.mark.asyncio
async def test_delete(manager, task_store, sample_task, alice):
    """Test deleting a task, then deleting it again."""
    await task_store.upsert(sample_task)

    await manager.delete(sample_task.id, alice.id)
    assert await task_store.find(sample_task.id, alice.id) is None

    with pytest.raises(TaskNotFound):
        await manager.delete(sample_task.id, alice.id)


@pytest.mark.asyncio
async def test_delete_foreign_task(manager, task_store, sample_task, alice, bob):
    """Test that deleting another owner's task fails and keeps the task."""
    await task_store.upsert(sample_task)

    with pytest.raises(TaskNotFound):
        await manager.delete(sample_task.id, bob.id)

    assert await task_store.find(sample_task.id, alice.id) is not None


@pytest.mark.asyncio
async def test_delete_checks_ownership_before_removing(alice):
    """Test that delete never reaches the store when ownership fails."""
    task_store = MagicMock(spec=TaskStore)
    task_store.find = AsyncMock(return_value=None)
    task_store.delete = AsyncMock()
    manager = TaskResourceManager(task_store)

    with pytest.raises(TaskNotFound):
        await manager.delete("task-1", alice.id)

    task_store.delete.assert_not_called()

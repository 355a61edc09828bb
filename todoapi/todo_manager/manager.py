"""
Owner-scoped todo item management.
"""

import logging
from typing import TYPE_CHECKING, List

from todoapi.todo_manager.models import Difficulty, Task
from todoapi.utils.error_handling import IntegrityFault, TaskNotFound

if TYPE_CHECKING:
    from todoapi.storage.base import TaskStore


logger = logging.getLogger(__name__)

COMPONENT = "todo_manager"


class TaskResourceManager:
    """
    CRUD over todo items, always scoped to the resolved owner.

    Every operation takes the owner ID from the caller; a task that belongs
    to another account is reported exactly like a missing one.
    """

    def __init__(self, task_store: "TaskStore"):
        self.task_store = task_store

    async def list_owned(self, owner_id: str) -> List[Task]:
        """Get all todo items owned by owner_id."""
        return await self.task_store.find_by_owner(owner_id)

    async def get_owned(self, task_id: str, owner_id: str) -> Task:
        """
        Get a todo item, checking ownership.

        Args:
            task_id: Todo item ID
            owner_id: Resolved caller identity

        Returns:
            The todo item

        Raises:
            TaskNotFound: If the item does not exist or belongs to someone else
        """
        task = await self.task_store.find(task_id, owner_id)
        if task is None:
            raise TaskNotFound(
                f"Todo item with id: '{task_id}' does not exist",
                component=COMPONENT,
                details={"task_id": task_id}
            )
        return task

    async def create(self,
                     owner_id: str,
                     title: str,
                     description: str,
                     difficulty: Difficulty) -> Task:
        """
        Create a new pending todo item.

        Args:
            owner_id: Resolved caller identity
            title: Title
            description: Description
            difficulty: Difficulty

        Returns:
            The created todo item

        Raises:
            IntegrityFault: If the store reports anything but one affected row
        """
        task = Task(
            user_id=owner_id,
            title=title,
            description=description,
            difficulty=difficulty,
            is_done=False
        )

        rows_affected = await self.task_store.upsert(task)
        if rows_affected != 1:
            logger.error(f"Creating todo item {task.id} affected {rows_affected} rows")
            raise IntegrityFault(
                "Something went wrong",
                component=COMPONENT,
                details={"task_id": task.id, "rows_affected": rows_affected}
            )

        logger.info(f"Created todo item {task.id} for account {owner_id}")
        return task

    async def update(self,
                     task_id: str,
                     owner_id: str,
                     title: str,
                     description: str,
                     difficulty: Difficulty) -> Task:
        """
        Overwrite the editable fields of a todo item.

        Args:
            task_id: Todo item ID
            owner_id: Resolved caller identity
            title: New title
            description: New description
            difficulty: New difficulty

        Returns:
            The updated todo item
        """
        task = await self.get_owned(task_id, owner_id)

        task.title = title
        task.description = description
        task.difficulty = difficulty

        await self.task_store.upsert(task)
        return task

    async def toggle_done(self, task_id: str, owner_id: str) -> Task:
        """Flip the done flag of a todo item."""
        task = await self.get_owned(task_id, owner_id)

        task.is_done = not task.is_done

        await self.task_store.upsert(task)
        return task

    async def delete(self, task_id: str, owner_id: str) -> None:
        """
        Delete a todo item.

        Raises:
            TaskNotFound: If the item does not exist or belongs to someone else
        """
        await self.get_owned(task_id, owner_id)
        await self.task_store.delete(task_id)

        logger.info(f"Deleted todo item {task_id}")

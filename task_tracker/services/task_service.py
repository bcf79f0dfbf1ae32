"""
Task business logic service.

Mutations on an existing task look the row up first, so a task that never
existed is reported as NotFoundError (404) rather than a failed write (500).
The lookup and the write are separate statements; a task deleted by another
request in between also ends up as NotFoundError.
"""

import logging
from typing import Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from task_tracker.errors import NotFoundError, PersistenceFailure, translate_persistence_errors
from task_tracker.models.task import Task
from task_tracker.repositories.task_repository import TaskRepository
from task_tracker.schemas.task import validate_task_payload

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


class TaskService:
    """Service for task business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = TaskRepository(db)

    async def list_tasks(self) -> List[Task]:
        """List all tasks, newest first."""
        async with translate_persistence_errors("Failed to fetch tasks"):
            return await self.repository.list_all()

    async def create_task(self, data: Any) -> Task:
        """Validate a payload and create a task from it."""
        payload = validate_task_payload(data)
        async with translate_persistence_errors("Failed to create task"):
            task = await self.repository.insert(payload)
            await self.db.commit()
        if task is None:
            raise PersistenceFailure("Failed to create task")
        logger.info("Created task %s for %r", task.id, task.client_name)
        return task

    async def update_task(self, task_id: int, data: Any) -> Task:
        """Overwrite an existing task with a validated payload."""
        async with translate_persistence_errors("Failed to update task"):
            await self._require(task_id)
            payload = validate_task_payload(data)
            task = await self.repository.update(task_id, payload)
            await self.db.commit()
        if task is None:
            raise self._not_found(task_id)
        logger.info("Updated task %s", task_id)
        return task

    async def delete_task(self, task_id: int) -> None:
        """Permanently delete an existing task."""
        async with translate_persistence_errors("Failed to delete task"):
            await self._require(task_id)
            deleted = await self.repository.delete(task_id)
            await self.db.commit()
        if not deleted:
            raise self._not_found(task_id)
        logger.info("Deleted task %s", task_id)

    async def toggle_payment(self, task_id: int) -> Task:
        """Flip the paid flag of an existing task."""
        async with translate_persistence_errors("Failed to update payment status"):
            await self._require(task_id)
            task = await self.repository.toggle_payment(task_id)
            await self.db.commit()
        if task is None:
            raise self._not_found(task_id)
        logger.info("Task %s is_paid set to %s", task_id, task.is_paid)
        return task

    async def _require(self, task_id: int) -> Task:
        task = await self.repository.find_by_id(task_id)
        if task is None:
            raise self._not_found(task_id)
        return task

    @staticmethod
    def _not_found(task_id: int) -> NotFoundError:
        logger.info("Task %s not found", task_id)
        return NotFoundError(TASK_NOT_FOUND)

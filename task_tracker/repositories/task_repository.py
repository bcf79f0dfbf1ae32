"""
Task repository - database operations for Task.

Each method issues one bound-parameter statement; the writes re-read the row
afterwards so callers see what the database holds (ids, defaults, timestamps)
rather than an echo of their input. Methods flush but never commit: the
service owns the transaction.
"""

from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from task_tracker.models.task import Task
from task_tracker.schemas.task import TaskPayload


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[Task]:
        """List every task, newest first."""
        query = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """Get a task by ID, or None when no row matches."""
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def insert(self, data: TaskPayload) -> Optional[Task]:
        """Create a new task and return it as stored."""
        task = Task(**data.model_dump())
        self.db.add(task)
        await self.db.flush()
        return await self.find_by_id(task.id)

    async def update(self, task_id: int, data: TaskPayload) -> Optional[Task]:
        """
        Overwrite every mutable field of a task.

        Does not check that the row exists; returns None if it does not.
        """
        await self.db.execute(
            update(Task)
            .where(Task.id == task_id)
            .values(**data.model_dump(), updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return await self.find_by_id(task_id)

    async def delete(self, task_id: int) -> bool:
        """Delete a task. Returns True if a row was removed."""
        result = await self.db.execute(
            delete(Task)
            .where(Task.id == task_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def toggle_payment(self, task_id: int) -> Optional[Task]:
        """Flip is_paid in a single statement, so concurrent toggles never read stale state."""
        await self.db.execute(
            update(Task)
            .where(Task.id == task_id)
            .values(is_paid=~Task.is_paid, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return await self.find_by_id(task_id)

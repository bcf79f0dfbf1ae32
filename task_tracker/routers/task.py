"""
Task router - API endpoints for tasks.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_tracker.core.dependencies import get_task_id
from task_tracker.db.session import get_db
from task_tracker.schemas.base import MessageResponse
from task_tracker.schemas.task import TaskRead
from task_tracker.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskRead])
async def list_tasks(db: AsyncSession = Depends(get_db)):
    """List all tasks, newest first."""
    service = TaskService(db)
    return await service.list_tasks()


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
):
    """Create a new task."""
    service = TaskService(db)
    return await service.create_task(payload)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: int = Depends(get_task_id),
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
):
    """Replace every editable field of a task."""
    service = TaskService(db)
    return await service.update_task(task_id, payload)


@router.patch("/{task_id}/toggle-payment", response_model=TaskRead)
async def toggle_payment(
    task_id: int = Depends(get_task_id),
    db: AsyncSession = Depends(get_db),
):
    """Flip a task between paid and unpaid."""
    service = TaskService(db)
    return await service.toggle_payment(task_id)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int = Depends(get_task_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a task permanently."""
    service = TaskService(db)
    await service.delete_task(task_id)
    return MessageResponse(message="Task deleted successfully")

"""
FastAPI dependencies for the application.
"""

from fastapi import Path

from task_tracker.errors import ValidationError

# Upper bound of the INTEGER primary key column
MAX_TASK_ID = 2_147_483_647


async def get_task_id(task_id: str = Path(..., description="Positive integer task ID")) -> int:
    """
    Parse the {task_id} path segment.

    Raises 400 for anything but a positive integer that fits the id column,
    before any service code runs.
    """
    if not (task_id.isascii() and task_id.isdigit()):
        raise ValidationError("Invalid task ID")

    value = int(task_id)
    if value <= 0 or value > MAX_TASK_ID:
        raise ValidationError("Invalid task ID")
    return value

"""
Schemas package.

Import all schemas here for easy access.
"""

from task_tracker.schemas.base import HealthRead, MessageResponse, TimestampedRead
from task_tracker.schemas.task import TaskPayload, TaskRead, validate_task_payload

__all__ = [
    "HealthRead",
    "MessageResponse",
    "TimestampedRead",
    "TaskPayload",
    "TaskRead",
    "validate_task_payload",
]

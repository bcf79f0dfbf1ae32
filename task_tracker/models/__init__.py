"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from task_tracker.models.task import Task

__all__ = ["Task"]

"""
Seed script to create a few sample tasks for local development.

Does nothing if the tasks table already has rows.

Usage:
    python scripts/seed_test_data.py
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import task_tracker modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import func, select

from task_tracker.core.config import settings
from task_tracker.db.session import Database
from task_tracker.models.task import Task
from task_tracker.repositories.task_repository import TaskRepository
from task_tracker.schemas.task import validate_task_payload

SAMPLE_TASKS = [
    {
        "client_name": "Acme",
        "task_description": "Logo design",
        "date_commissioned": "2026-09-01",
        "date_delivered": "2026-09-15",
        "expected_amount": "500.00",
        "is_paid": True,
    },
    {
        "client_name": "Globex",
        "task_description": "Landing page copy",
        "date_commissioned": "2026-10-02",
        "expected_amount": "320.50",
    },
    {
        "client_name": "Initech",
        "task_description": "Quarterly report layout",
        "expected_amount": "1200",
    },
]


async def seed_test_data():
    """Insert SAMPLE_TASKS into an empty tasks table."""
    database = Database.from_settings(settings)
    try:
        async with database.session() as db:
            count = await db.scalar(select(func.count()).select_from(Task))
            if count:
                print(f"[OK] Found {count} existing tasks, nothing to seed")
                return

            repository = TaskRepository(db)
            for data in SAMPLE_TASKS:
                task = await repository.insert(validate_task_payload(data))
                print(f"[OK] Created task {task.id}: {task.client_name} - {task.task_description}")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(seed_test_data())

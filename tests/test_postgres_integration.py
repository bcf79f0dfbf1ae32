"""
PostgreSQL integration tests.

Uses DATABASE_URL from the environment / .env and creates the tables if
needed. Run with: RUN_DB_TESTS=1 pytest -m db
"""

import asyncio

import pytest

from task_tracker.core.config import Settings
from task_tracker.db.session import Database
from task_tracker.services.task_service import TaskService

pytestmark = [pytest.mark.asyncio, pytest.mark.db]

ACME = {"client_name": "Acme", "task_description": "Logo design", "expected_amount": "500.00"}


async def test_concurrent_toggles_each_flip_once():
    database = Database.from_settings(Settings())
    await database.create_all()
    try:
        async with database.session() as db:
            task = await TaskService(db).create_task(ACME)

        async def toggle():
            async with database.session() as db:
                return await TaskService(db).toggle_payment(task.id)

        await asyncio.gather(toggle(), toggle())

        async with database.session() as db:
            final = await TaskService(db).repository.find_by_id(task.id)
            assert final.is_paid is False
            await TaskService(db).delete_task(task.id)
    finally:
        await database.dispose()

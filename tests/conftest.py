"""
Pytest configuration and shared fixtures.

Tests run against a throwaway SQLite file per test (via aiosqlite) with the
tables created from the models. Tests marked `db` or `server` need a real
PostgreSQL database or a running server and are skipped by default.
"""

import os

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from task_tracker.core.config import Settings
from task_tracker.db.session import Database
from task_tracker.main import create_app


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=sqlite_url(tmp_path / "tasks.db"),
        DB_CREATE_TABLES=True,
        DEBUG=False,
    )


@pytest.fixture
def client(settings):
    """A TestClient with the app's lifespan running (pool open, tables created)."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def database(tmp_path):
    database = Database(sqlite_url(tmp_path / "repository.db"))
    await database.create_all()
    try:
        yield database
    finally:
        await database.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as session:
        yield session


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires database")
    config.addinivalue_line("markers", "server: requires running HTTP server")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"
    run_server = os.environ.get("RUN_SERVER_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")
    skip_server = pytest.mark.skip(reason="server tests skipped by default; set RUN_SERVER_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)
        if "server" in item.keywords and not run_server:
            item.add_marker(skip_server)

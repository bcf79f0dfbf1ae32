"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from task_tracker import __version__
from task_tracker.core.config import Settings, settings as default_settings
from task_tracker.core.logging import configure_logging
from task_tracker.db.session import Database
from task_tracker.errors import register_error_handlers
from task_tracker.routers import health, task

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one connection pool."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for the FastAPI app.

        - On startup: open the connection pool and check the database.
        - On shutdown: close every pooled connection.
        """
        configure_logging(settings.LOG_LEVEL)
        logger.info("Starting %s...", settings.APP_NAME)

        database = Database.from_settings(settings)
        app.state.database = database
        app.state.started_at = time.monotonic()

        # A database that is down at boot is reported, not fatal;
        # requests fail with 500 until it comes back.
        try:
            if settings.DB_CREATE_TABLES:
                await database.create_all()
            await database.ping()
            logger.info("Database connection OK")
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Database connection failed: %s", exc)

        yield  # The server runs while we're "yielded" here

        logger.info("Shutting down %s...", settings.APP_NAME)
        await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="REST API for tracking client work items and their payment status",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_error_handlers(app)

    # Include routers (API endpoints)
    app.include_router(health.router, tags=["Health"])
    app.include_router(task.router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        """Root endpoint - confirms the API is up."""
        return {"success": True, "message": "API is running"}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    configure_logging(default_settings.LOG_LEVEL)
    uvicorn.run(
        "task_tracker.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
    )


if __name__ == "__main__":
    run()

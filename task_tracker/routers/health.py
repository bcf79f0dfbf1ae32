"""Health check router."""

import logging
import time
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from task_tracker.db.session import Database
from task_tracker.schemas.base import HealthRead

logger = logging.getLogger(__name__)

router = APIRouter()

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@lru_cache(maxsize=1)
def migration_head() -> Optional[str]:
    """Newest revision shipped in alembic/versions, or None outside a checkout."""
    cfg_path = PROJECT_ROOT / "alembic.ini"
    script_location = PROJECT_ROOT / "alembic"
    if not cfg_path.exists() or not script_location.exists():
        return None

    config = Config(str(cfg_path))
    config.set_main_option("script_location", str(script_location))
    return ScriptDirectory.from_config(config).get_current_head()


async def _schema_revision(database: Database) -> Optional[str]:
    # None when the tables were created from metadata instead of migrations
    async with database.engine.connect() as conn:
        return await conn.run_sync(
            lambda sync_conn: MigrationContext.configure(sync_conn).get_current_revision()
        )


@router.get("/health", response_model=HealthRead)
async def health_check(request: Request) -> HealthRead:
    """Liveness plus database reachability and migration state."""
    database: Database = request.app.state.database
    db_ok = True
    revision: Optional[str] = None

    try:
        await database.ping()
        revision = await _schema_revision(database)
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        db_ok = False

    head = migration_head()
    started_at = getattr(request.app.state, "started_at", None)

    return HealthRead(
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - started_at, 3) if started_at is not None else 0.0,
        db_ok=db_ok,
        alembic_current=revision,
        alembic_head=head,
        alembic_head_ok=bool(revision and head and revision == head),
    )

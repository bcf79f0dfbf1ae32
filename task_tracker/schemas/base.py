"""
Base Pydantic schemas with common fields.

These are templates that other schemas inherit from.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TimestampedRead(BaseModel):
    """
    Base schema for reading persisted rows.

    Includes all the auto-generated fields like id and timestamps.
    """

    id: int
    created_at: datetime
    updated_at: datetime

    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement body, e.g. for deletes."""

    success: bool = True
    message: str


class HealthRead(BaseModel):
    """Body of GET /health."""

    success: bool = True
    message: str = "Server is running"
    timestamp: datetime
    uptime: float
    db_ok: bool
    alembic_current: Optional[str] = None
    alembic_head: Optional[str] = None
    alembic_head_ok: bool = False

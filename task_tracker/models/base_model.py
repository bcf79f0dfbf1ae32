"""
Base model with common fields.

Tables that inherit from this get:
- id (integer primary key, assigned by the database)
- created_at (when the record was created)
- updated_at (when the record was last modified)
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from task_tracker.db.base import Base


class TimestampedModel(Base):
    """
    Abstract base class for models with a surrogate key and timestamps.

    This is not a real table - it's a template that other models inherit from.
    """

    __abstract__ = True  # This means: don't create a table for this class

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Timestamps - set by the database, never by callers
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

"""
Task model.

Represents one unit of billable client work.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Date, Index, Numeric, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from task_tracker.models.base_model import TimestampedModel


class Task(TimestampedModel):
    """
    Tasks table - client work items and their payment status.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("expected_amount >= 0", name="ck_tasks_expected_amount_non_negative"),
        Index("ix_tasks_created_at", "created_at"),
        # Keep SQLite from handing out the id of a deleted row again
        {"sqlite_autoincrement": True},
    )

    client_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    task_description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    date_commissioned: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    date_delivered: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    expected_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )

    is_paid: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} client_name={self.client_name!r} is_paid={self.is_paid}>"

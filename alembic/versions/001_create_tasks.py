"""Create tasks table

Revision ID: 001_create_tasks
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_tasks'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the tasks table.

    created_at and updated_at default to the database clock; the
    application sets updated_at explicitly on every write.
    """
    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('client_name', sa.String(length=255), nullable=False),
        sa.Column('task_description', sa.Text(), nullable=False),
        sa.Column('date_commissioned', sa.Date(), nullable=True),
        sa.Column('date_delivered', sa.Date(), nullable=True),
        sa.Column('expected_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('is_paid', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('expected_amount >= 0', name='ck_tasks_expected_amount_non_negative'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_tasks_created_at', 'tasks', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_tasks_created_at', table_name='tasks')
    op.drop_table('tasks')

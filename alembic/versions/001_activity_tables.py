"""Initial schema — activity_register, activity_priority, activity_deadlines.

Revision ID: 001_activity_tables
Revises: None
Create Date: 2026-10-19

Three independent tables keyed by identity. No foreign keys: priority and
deadline rows outlive a cancelled register row.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_activity_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "activity_register",
        sa.Column("identity", sa.String(128), primary_key=True),
        sa.Column("description", sa.String(100), nullable=False),
        sa.Column("completed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "activity_priority",
        sa.Column("identity", sa.String(128), primary_key=True),
        sa.Column("level", sa.Integer, nullable=False),
        sa.CheckConstraint("level BETWEEN 1 AND 3", name="ck_activity_priority_level"),
    )

    op.create_table(
        "activity_deadlines",
        sa.Column("identity", sa.String(128), primary_key=True),
        sa.Column("completion_height", sa.BigInteger, nullable=False),
        sa.Column("alert_triggered", sa.Boolean, nullable=False, server_default=sa.false()),
    )


def downgrade() -> None:
    op.drop_table("activity_deadlines")
    op.drop_table("activity_priority")
    op.drop_table("activity_register")

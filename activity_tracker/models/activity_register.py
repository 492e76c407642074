"""ActivityRegister ORM — the authoritative per-identity activity record.

Invariants:
    - identity is the primary key: at most one activity per identity
    - description is 1–100 characters (enforced by core/enforce_activity.py)
    - completed is non-nullable: exactly true or false
    - Presence of a row means "this identity has an active activity"

Design Decisions:
    - No relationship to priority/deadline tables: cancelling deletes this row only,
      leaving the other two stores orphaned
"""

from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from activity_tracker.db.base import Base
from activity_tracker.core.domain_types import (
    MAX_DESCRIPTION_LENGTH, MAX_IDENTITY_LENGTH,
)


class ActivityRegister(Base):
    """One activity per identity — description plus completion flag."""
    __tablename__ = "activity_register"

    identity: Mapped[str] = mapped_column(
        String(MAX_IDENTITY_LENGTH), primary_key=True,
    )
    description: Mapped[str] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH), nullable=False,
    )
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

"""ActivityPriority ORM — priority level attached to an identity's activity.

Invariants:
    - level is always in [1, 3]
    - Created or overwritten by assign-priority, never deleted
"""

from sqlalchemy import String, Integer, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from activity_tracker.db.base import Base
from activity_tracker.core.domain_types import MAX_IDENTITY_LENGTH


class ActivityPriority(Base):
    __tablename__ = "activity_priority"
    __table_args__ = (
        CheckConstraint("level BETWEEN 1 AND 3", name="ck_activity_priority_level"),
    )

    identity: Mapped[str] = mapped_column(
        String(MAX_IDENTITY_LENGTH), primary_key=True,
    )
    level: Mapped[int] = mapped_column(Integer, nullable=False)

"""ActivityDeadline ORM — target block height for an identity's activity.

Invariants:
    - completion_height was strictly in the future when stored (never re-validated)
    - alert_triggered defaults to false and no operation mutates it
    - Created or overwritten by establish-deadline, never deleted

Design Decisions:
    - BigInteger for completion_height: block heights outgrow 32 bits on long-lived chains
"""

from sqlalchemy import String, BigInteger, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from activity_tracker.db.base import Base
from activity_tracker.core.domain_types import MAX_IDENTITY_LENGTH


class ActivityDeadline(Base):
    """Deadline entry — keyed by identity, same as the register."""
    __tablename__ = "activity_deadlines"

    identity: Mapped[str] = mapped_column(
        String(MAX_IDENTITY_LENGTH), primary_key=True,
    )
    completion_height: Mapped[int] = mapped_column(BigInteger, nullable=False)
    alert_triggered: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

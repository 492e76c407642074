"""ORM Models — SQLAlchemy declarative models for the three activity stores.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every table is keyed by identity; no foreign keys between them

Design Decisions:
    - One file per store for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from activity_tracker.models.activity_register import ActivityRegister  # noqa: F401
from activity_tracker.models.activity_priority import ActivityPriority  # noqa: F401
from activity_tracker.models.activity_deadline import ActivityDeadline  # noqa: F401

"""Activity Records — immutable read results returned by the store.

Invariants:
    - Records are detached from the ORM (safe to return after the session closes)
    - ActivityExistence.absent() is a valid result, not an error

Design Decisions:
    - Frozen dataclasses: pure values, comparable in tests without mocks
"""

from dataclasses import dataclass

from activity_tracker.core.domain_types import BlockHeight, PriorityLevel


@dataclass(frozen=True)
class ActivityDetails:
    description: str
    completed: bool


@dataclass(frozen=True)
class ActivityExistence:
    exists: bool
    description_length: int
    is_complete: bool

    @classmethod
    def absent(cls) -> "ActivityExistence":
        return cls(exists=False, description_length=0, is_complete=False)


@dataclass(frozen=True)
class PriorityRecord:
    level: PriorityLevel


@dataclass(frozen=True)
class DeadlineRecord:
    # alert_triggered is reserved for an external notifier; nothing here flips it
    completion_height: BlockHeight
    alert_triggered: bool = False

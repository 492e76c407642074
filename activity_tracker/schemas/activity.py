"""Activity Schemas — Pydantic models for the activity API boundary.

Invariants:
    - Request models check shape and types only; value rules (non-empty description,
      priority 1–3, positive deadline offset) belong to core/enforce_activity.py so
      the store reports them as INVALID_INPUT whichever layer calls it
    - Response models mirror core/activity_records.py one-to-one

Design Decisions:
    - from_record classmethods: the route never touches dataclass fields directly
"""

from pydantic import BaseModel, Field

from activity_tracker.core.activity_records import (
    ActivityDetails, ActivityExistence, DeadlineRecord, PriorityRecord,
)
from activity_tracker.core.domain_types import (
    MAX_BLOCK_HEIGHT, MAX_IDENTITY_LENGTH,
)


# --- Requests -----------------------------------------------------------------

class ActivityCreate(BaseModel):
    """register-activity body."""
    description: str


class ActivityAssign(BaseModel):
    """assign-activity body — recipient is an arbitrary identity."""
    recipient: str = Field(min_length=1, max_length=MAX_IDENTITY_LENGTH)
    description: str


class ActivityUpdate(BaseModel):
    """modify-activity body."""
    description: str
    completed: bool


class DeadlineCreate(BaseModel):
    # Lower bound is a store rule (0 must report INVALID_INPUT); upper bound fits BIGINT
    blocks_until_due: int = Field(le=MAX_BLOCK_HEIGHT)


class PriorityCreate(BaseModel):
    level: int


# --- Responses ----------------------------------------------------------------

class MessageResponse(BaseModel):
    """Confirmation returned by every mutating operation."""
    message: str


class ActivityDetailsResponse(BaseModel):
    identity: str
    description: str
    completed: bool

    @classmethod
    def from_record(cls, identity: str, record: ActivityDetails) -> "ActivityDetailsResponse":
        return cls(
            identity=identity,
            description=record.description,
            completed=record.completed,
        )


class CompletionResponse(BaseModel):
    identity: str
    completed: bool


class ExistenceResponse(BaseModel):
    exists: bool
    description_length: int
    is_complete: bool

    @classmethod
    def from_record(cls, record: ActivityExistence) -> "ExistenceResponse":
        return cls(
            exists=record.exists,
            description_length=record.description_length,
            is_complete=record.is_complete,
        )


class PriorityResponse(BaseModel):
    identity: str
    level: int

    @classmethod
    def from_record(cls, identity: str, record: PriorityRecord) -> "PriorityResponse":
        return cls(identity=identity, level=int(record.level))


class DeadlineResponse(BaseModel):
    identity: str
    completion_height: int
    alert_triggered: bool

    @classmethod
    def from_record(cls, identity: str, record: DeadlineRecord) -> "DeadlineResponse":
        return cls(
            identity=identity,
            completion_height=record.completion_height,
            alert_triggered=record.alert_triggered,
        )

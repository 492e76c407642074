"""Activity Schemas — request shape validation and record-to-response mapping.

Invariants:
    - Requests check types only; empty descriptions pass through to the store
    - Response models mirror the core records
"""

import pytest
from pydantic import ValidationError

from activity_tracker.core.activity_records import (
    ActivityDetails, ActivityExistence, DeadlineRecord, PriorityRecord,
)
from activity_tracker.core.domain_types import BlockHeight, PriorityLevel
from activity_tracker.schemas.activity import (
    ActivityAssign,
    ActivityCreate,
    ActivityDetailsResponse,
    ActivityUpdate,
    DeadlineResponse,
    ExistenceResponse,
    PriorityCreate,
    PriorityResponse,
)


def test_activity_create_keeps_empty_description_for_store_check():
    assert ActivityCreate(description="").description == ""


def test_activity_update_requires_completed():
    with pytest.raises(ValidationError):
        ActivityUpdate(description="Write report")


def test_activity_assign_requires_recipient():
    with pytest.raises(ValidationError):
        ActivityAssign(recipient="", description="Review PR")


def test_priority_create_rejects_non_integer():
    with pytest.raises(ValidationError):
        PriorityCreate(level="high")


def test_details_response_from_record():
    resp = ActivityDetailsResponse.from_record(
        "alice", ActivityDetails(description="Write report", completed=True),
    )
    assert resp.model_dump() == {
        "identity": "alice", "description": "Write report", "completed": True,
    }


def test_existence_response_from_absent_record():
    resp = ExistenceResponse.from_record(ActivityExistence.absent())
    assert resp.model_dump() == {
        "exists": False, "description_length": 0, "is_complete": False,
    }


def test_priority_response_serializes_level_as_int():
    resp = PriorityResponse.from_record(
        "alice", PriorityRecord(level=PriorityLevel.MEDIUM),
    )
    assert resp.model_dump() == {"identity": "alice", "level": 2}


def test_deadline_response_from_record():
    resp = DeadlineResponse.from_record(
        "alice", DeadlineRecord(completion_height=BlockHeight(150)),
    )
    assert resp.completion_height == 150
    assert resp.alert_triggered is False

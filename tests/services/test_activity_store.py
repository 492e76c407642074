"""Activity Store — verifies the nine operations and their error contract.

Invariants:
    - register/assign: Conflict when an entry exists, InvalidInput on empty description
    - modify/cancel/deadline/priority: NotFound before any input check
    - Failed calls leave the stores unchanged
    - Cancel orphans priority and deadline entries (no cascade)
    - check_activity_existence never raises
"""

import pytest
from sqlalchemy import select

from activity_tracker.core.activity_records import (
    ActivityDetails, ActivityExistence, DeadlineRecord, PriorityRecord,
)
from activity_tracker.core.domain_types import BlockHeight, Identity, PriorityLevel
from activity_tracker.core.errors import (
    ActivityConflictError, ActivityNotFoundError, InvalidInputError,
)
from activity_tracker.models.activity_register import ActivityRegister
from activity_tracker.services.activity_store import (
    ASSIGNED, CANCELLED, DEADLINE_ESTABLISHED, PRIORITY_ASSIGNED,
    REGISTERED, UPDATED,
)

ALICE = Identity("ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM")
BOB = Identity("ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG")


async def _register_rows(test_db) -> list[ActivityRegister]:
    result = await test_db.execute(select(ActivityRegister))
    return list(result.scalars().all())


# ─── register-activity ──────────────────────────────────────────

async def test_register_activity_succeeds_for_fresh_identity(store):
    assert await store.register_activity(ALICE, "Write report") == REGISTERED
    details = await store.get_activity_details(ALICE)
    assert details == ActivityDetails(description="Write report", completed=False)


async def test_register_twice_is_conflict(store):
    await store.register_activity(ALICE, "Write report")
    with pytest.raises(ActivityConflictError) as exc:
        await store.register_activity(ALICE, "Something else")
    assert exc.value.http_status == 409
    assert exc.value.context.operation == "register-activity"
    details = await store.get_activity_details(ALICE)
    assert details.description == "Write report"


async def test_register_empty_description_is_invalid_and_writes_nothing(store, test_db):
    with pytest.raises(InvalidInputError) as exc:
        await store.register_activity(ALICE, "")
    assert exc.value.http_status == 400
    assert await _register_rows(test_db) == []


async def test_register_over_long_description_is_invalid(store):
    with pytest.raises(InvalidInputError):
        await store.register_activity(ALICE, "x" * 101)
    existence = await store.check_activity_existence(ALICE)
    assert existence.exists is False


async def test_register_conflict_checked_before_description(store):
    await store.register_activity(ALICE, "Write report")
    with pytest.raises(ActivityConflictError):
        await store.register_activity(ALICE, "")


# ─── assign-activity ────────────────────────────────────────────

async def test_assign_activity_creates_entry_under_recipient(store):
    assert await store.assign_activity(BOB, "Review PR") == ASSIGNED
    assert (await store.get_activity_details(BOB)).description == "Review PR"
    assert (await store.check_activity_existence(ALICE)).exists is False


async def test_assign_activity_twice_is_conflict(store):
    await store.assign_activity(BOB, "Review PR")
    with pytest.raises(ActivityConflictError) as exc:
        await store.assign_activity(BOB, "Review PR")
    assert exc.value.context.identity == BOB


async def test_assign_activity_conflicts_with_registered_entry(store):
    await store.register_activity(BOB, "Own task")
    with pytest.raises(ActivityConflictError):
        await store.assign_activity(BOB, "Review PR")


async def test_assign_activity_empty_description_is_invalid(store):
    with pytest.raises(InvalidInputError):
        await store.assign_activity(BOB, "")


# ─── modify-activity ────────────────────────────────────────────

async def test_modify_activity_overwrites_fields(store):
    await store.register_activity(ALICE, "Write report")
    assert await store.modify_activity(ALICE, "Write report v2", True) == UPDATED
    details = await store.get_activity_details(ALICE)
    assert details == ActivityDetails(description="Write report v2", completed=True)


async def test_modify_activity_can_reopen(store):
    await store.register_activity(ALICE, "Write report")
    await store.modify_activity(ALICE, "Write report", True)
    await store.modify_activity(ALICE, "Write report", False)
    assert await store.verify_activity_completion(ALICE) is False


async def test_modify_without_activity_is_not_found(store):
    with pytest.raises(ActivityNotFoundError) as exc:
        await store.modify_activity(ALICE, "Anything", False)
    assert exc.value.http_status == 404


async def test_modify_not_found_takes_precedence_over_invalid_input(store):
    with pytest.raises(ActivityNotFoundError):
        await store.modify_activity(ALICE, "", False)


async def test_modify_empty_description_is_invalid_and_keeps_old_value(store):
    await store.register_activity(ALICE, "Write report")
    with pytest.raises(InvalidInputError):
        await store.modify_activity(ALICE, "", True)
    details = await store.get_activity_details(ALICE)
    assert details == ActivityDetails(description="Write report", completed=False)


# ─── cancel-activity ────────────────────────────────────────────

async def test_cancel_without_activity_is_not_found(store):
    with pytest.raises(ActivityNotFoundError):
        await store.cancel_activity(ALICE)


async def test_cancel_removes_entry(store):
    await store.register_activity(ALICE, "Write report")
    assert await store.cancel_activity(ALICE) == CANCELLED
    with pytest.raises(ActivityNotFoundError):
        await store.get_activity_details(ALICE)


async def test_register_after_cancel_succeeds(store):
    await store.register_activity(ALICE, "Write report")
    await store.cancel_activity(ALICE)
    assert await store.register_activity(ALICE, "Second task") == REGISTERED
    assert (await store.get_activity_details(ALICE)).description == "Second task"


async def test_cancel_leaves_priority_and_deadline_orphaned(store):
    await store.register_activity(ALICE, "Write report")
    await store.assign_priority(ALICE, 3)
    await store.establish_deadline(ALICE, 10, BlockHeight(100))
    await store.cancel_activity(ALICE)

    assert await store.get_activity_priority(ALICE) == PriorityRecord(
        level=PriorityLevel.HIGH,
    )
    assert await store.get_activity_deadline(ALICE) == DeadlineRecord(
        completion_height=BlockHeight(110), alert_triggered=False,
    )


# ─── establish-deadline ─────────────────────────────────────────

async def test_establish_deadline_stores_current_plus_offset(store):
    await store.register_activity(ALICE, "Write report")
    result = await store.establish_deadline(ALICE, 144, BlockHeight(5000))
    assert result == DEADLINE_ESTABLISHED
    deadline = await store.get_activity_deadline(ALICE)
    assert deadline.completion_height == 5144
    assert deadline.alert_triggered is False


async def test_establish_deadline_zero_is_invalid_even_with_activity(store):
    await store.register_activity(ALICE, "Write report")
    with pytest.raises(InvalidInputError) as exc:
        await store.establish_deadline(ALICE, 0, BlockHeight(5000))
    assert exc.value.field == "blocks_until_due"
    with pytest.raises(ActivityNotFoundError):
        await store.get_activity_deadline(ALICE)


async def test_establish_deadline_without_activity_is_not_found(store):
    with pytest.raises(ActivityNotFoundError):
        await store.establish_deadline(ALICE, 10, BlockHeight(0))


async def test_establish_deadline_without_activity_not_found_even_for_zero(store):
    with pytest.raises(ActivityNotFoundError):
        await store.establish_deadline(ALICE, 0, BlockHeight(0))


async def test_establish_deadline_overwrites_previous(store):
    await store.register_activity(ALICE, "Write report")
    await store.establish_deadline(ALICE, 10, BlockHeight(100))
    await store.establish_deadline(ALICE, 50, BlockHeight(200))
    deadline = await store.get_activity_deadline(ALICE)
    assert deadline.completion_height == 250


# ─── assign-priority ────────────────────────────────────────────

@pytest.mark.parametrize("level", [1, 2, 3])
async def test_assign_priority_accepts_valid_levels(store, level):
    await store.register_activity(ALICE, "Write report")
    assert await store.assign_priority(ALICE, level) == PRIORITY_ASSIGNED
    assert (await store.get_activity_priority(ALICE)).level == level


@pytest.mark.parametrize("level", [0, 4])
async def test_assign_priority_rejects_out_of_range(store, level):
    await store.register_activity(ALICE, "Write report")
    with pytest.raises(InvalidInputError):
        await store.assign_priority(ALICE, level)
    with pytest.raises(ActivityNotFoundError):
        await store.get_activity_priority(ALICE)


@pytest.mark.parametrize("level", [0, 2, 4])
async def test_assign_priority_without_activity_is_not_found(store, level):
    with pytest.raises(ActivityNotFoundError):
        await store.assign_priority(ALICE, level)


async def test_assign_priority_overwrites_previous(store):
    await store.register_activity(ALICE, "Write report")
    await store.assign_priority(ALICE, 1)
    await store.assign_priority(ALICE, 3)
    assert (await store.get_activity_priority(ALICE)).level == PriorityLevel.HIGH


# ─── queries ────────────────────────────────────────────────────

async def test_get_details_unknown_identity_is_not_found(store):
    with pytest.raises(ActivityNotFoundError) as exc:
        await store.get_activity_details(BOB)
    assert exc.value.context.operation == "get-activity-details"


async def test_verify_completion_unknown_identity_is_not_found(store):
    with pytest.raises(ActivityNotFoundError):
        await store.verify_activity_completion(BOB)


async def test_verify_completion_reads_other_identity(store):
    await store.assign_activity(BOB, "Review PR")
    assert await store.verify_activity_completion(BOB) is False


async def test_check_existence_without_entry_is_not_an_error(store):
    assert await store.check_activity_existence(ALICE) == ActivityExistence(
        exists=False, description_length=0, is_complete=False,
    )


async def test_check_existence_reports_length_and_completion(store):
    await store.register_activity(ALICE, "Write report")
    await store.modify_activity(ALICE, "Write report", True)
    assert await store.check_activity_existence(ALICE) == ActivityExistence(
        exists=True, description_length=12, is_complete=True,
    )


async def test_get_priority_without_entry_is_not_found(store):
    with pytest.raises(ActivityNotFoundError) as exc:
        await store.get_activity_priority(ALICE)
    assert exc.value.record == "Priority"


# ─── end-to-end ─────────────────────────────────────────────────

async def test_activity_lifecycle_leaves_orphaned_priority(store):
    assert await store.register_activity(ALICE, "Write report") == REGISTERED
    assert await store.assign_priority(ALICE, 2) == PRIORITY_ASSIGNED
    assert await store.get_activity_details(ALICE) == ActivityDetails(
        description="Write report", completed=False,
    )
    assert await store.modify_activity(ALICE, "Write report v2", True) == UPDATED
    assert await store.verify_activity_completion(ALICE) is True
    assert await store.cancel_activity(ALICE) == CANCELLED

    with pytest.raises(ActivityNotFoundError):
        await store.get_activity_details(ALICE)
    assert (await store.get_activity_priority(ALICE)).level == 2


async def test_writes_are_visible_from_another_session(store, test_session_factory):
    await store.register_activity(ALICE, "Write report")
    async with test_session_factory() as other:
        row = await other.get(ActivityRegister, ALICE)
    assert row is not None
    assert row.completed is False

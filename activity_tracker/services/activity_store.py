"""Activity Store — the nine activity operations plus priority/deadline reads.

Invariants:
    - Three stores (register, priority, deadlines), all keyed by identity, reachable
      only through the methods below
    - Existence checks run before input checks; either one full write happens or none
    - Every write holds the written identity's lock for check + write + commit
    - Cancelling deletes the register row only: priority/deadline rows become orphans
    - alert_triggered is written as false and never touched again

Design Decisions:
    - Impureim sandwich: pure rules from core/enforce_activity.py, IO here
    - Caller identity passed explicitly by the host layer (routes), never ambient
    - IntegrityError on insert → Conflict: another process won the race for the key
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from activity_tracker.core.activity_records import (
    ActivityDetails, ActivityExistence, DeadlineRecord, PriorityRecord,
)
from activity_tracker.core.domain_types import (
    BlockHeight, Identity, Operation, PriorityLevel,
)
from activity_tracker.core.enforce_activity import (
    check_description, check_priority_level, compute_completion_height,
)
from activity_tracker.core.errors import (
    ActivityConflictError, ActivityNotFoundError, ErrorContext,
)
from activity_tracker.models.activity_register import ActivityRegister
from activity_tracker.models.activity_priority import ActivityPriority
from activity_tracker.models.activity_deadline import ActivityDeadline
from activity_tracker.services.identity_locks import IdentityLocks

logger = logging.getLogger(__name__)

REGISTERED = "Activity registered successfully"
ASSIGNED = "Activity assigned successfully"
UPDATED = "Activity updated successfully"
CANCELLED = "Activity cancelled successfully"
DEADLINE_ESTABLISHED = "Deadline established successfully"
PRIORITY_ASSIGNED = "Priority assigned successfully"


class ActivityStore:
    """Per-identity activity record store. One instance per DB session."""

    def __init__(self, db: AsyncSession, locks: IdentityLocks):
        self._db = db
        self._locks = locks

    # ─── Mutations ───────────────────────────────────────────────

    async def register_activity(
        self, caller: Identity, description: str,
    ) -> str:
        async with self._locks.hold(caller):
            await self._insert_activity(caller, description, Operation.REGISTER)
        _log_success(Operation.REGISTER, caller)
        return REGISTERED

    async def assign_activity(
        self, recipient: Identity, description: str,
    ) -> str:
        """Create a fresh activity for another identity. No permission check."""
        async with self._locks.hold(recipient):
            await self._insert_activity(recipient, description, Operation.ASSIGN)
        _log_success(Operation.ASSIGN, recipient)
        return ASSIGNED

    async def modify_activity(
        self, caller: Identity, description: str, completed: bool,
    ) -> str:
        async with self._locks.hold(caller):
            activity = await self._require_activity(caller, Operation.MODIFY)
            check_description(description, Operation.MODIFY)
            activity.description = description
            activity.completed = completed
            await self._db.commit()
        _log_success(Operation.MODIFY, caller)
        return UPDATED

    async def cancel_activity(self, caller: Identity) -> str:
        async with self._locks.hold(caller):
            activity = await self._require_activity(caller, Operation.CANCEL)
            await self._db.delete(activity)
            await self._db.commit()
        _log_success(Operation.CANCEL, caller)
        return CANCELLED

    async def establish_deadline(
        self, caller: Identity, blocks_until_due: int, current_height: BlockHeight,
    ) -> str:
        async with self._locks.hold(caller):
            await self._require_activity(caller, Operation.ESTABLISH_DEADLINE)
            target = compute_completion_height(current_height, blocks_until_due)
            deadline = await self._db.get(ActivityDeadline, caller)
            if deadline is None:
                deadline = ActivityDeadline(identity=caller)
                self._db.add(deadline)
            deadline.completion_height = target
            deadline.alert_triggered = False
            await self._db.commit()
        logger.info(
            f"{Operation.ESTABLISH_DEADLINE.value}: due at {target}",
            extra={
                "identity": caller,
                "operation": Operation.ESTABLISH_DEADLINE.value,
                "block_height": current_height,
            },
        )
        return DEADLINE_ESTABLISHED

    async def assign_priority(self, caller: Identity, level: int) -> str:
        async with self._locks.hold(caller):
            await self._require_activity(caller, Operation.ASSIGN_PRIORITY)
            priority_level = check_priority_level(level)
            priority = await self._db.get(ActivityPriority, caller)
            if priority is None:
                priority = ActivityPriority(identity=caller)
                self._db.add(priority)
            priority.level = priority_level.value
            await self._db.commit()
        _log_success(Operation.ASSIGN_PRIORITY, caller)
        return PRIORITY_ASSIGNED

    # ─── Queries ─────────────────────────────────────────────────

    async def get_activity_details(self, identity: Identity) -> ActivityDetails:
        activity = await self._require_activity(identity, Operation.GET_DETAILS)
        return ActivityDetails(
            description=activity.description, completed=activity.completed,
        )

    async def verify_activity_completion(self, identity: Identity) -> bool:
        activity = await self._require_activity(
            identity, Operation.VERIFY_COMPLETION,
        )
        return activity.completed

    async def check_activity_existence(
        self, caller: Identity,
    ) -> ActivityExistence:
        """Absence is a result, not an error."""
        activity = await self._db.get(ActivityRegister, caller)
        if activity is None:
            return ActivityExistence.absent()
        return ActivityExistence(
            exists=True,
            description_length=len(activity.description),
            is_complete=activity.completed,
        )

    async def get_activity_priority(self, identity: Identity) -> PriorityRecord:
        """Reads the priority store directly: orphaned entries are visible."""
        priority = await self._db.get(ActivityPriority, identity)
        if priority is None:
            raise ActivityNotFoundError(
                identity, "Priority",
                ErrorContext(operation=Operation.GET_PRIORITY.value),
            )
        return PriorityRecord(level=PriorityLevel(priority.level))

    async def get_activity_deadline(self, identity: Identity) -> DeadlineRecord:
        """Reads the deadline store directly: orphaned entries are visible."""
        deadline = await self._db.get(ActivityDeadline, identity)
        if deadline is None:
            raise ActivityNotFoundError(
                identity, "Deadline",
                ErrorContext(operation=Operation.GET_DEADLINE.value),
            )
        return DeadlineRecord(
            completion_height=BlockHeight(deadline.completion_height),
            alert_triggered=deadline.alert_triggered,
        )

    # ─── Helpers ─────────────────────────────────────────────────

    async def _require_activity(
        self, identity: Identity, operation: Operation,
    ) -> ActivityRegister:
        activity = await self._db.get(ActivityRegister, identity)
        if activity is None:
            raise ActivityNotFoundError(
                identity, context=ErrorContext(operation=operation.value),
            )
        return activity

    async def _insert_activity(
        self, identity: Identity, description: str, operation: Operation,
    ) -> None:
        if await self._db.get(ActivityRegister, identity) is not None:
            raise ActivityConflictError(
                identity, ErrorContext(operation=operation.value),
            )
        check_description(description, operation)
        self._db.add(ActivityRegister(
            identity=identity, description=description, completed=False,
        ))
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            raise ActivityConflictError(
                identity, ErrorContext(operation=operation.value),
            )


def _log_success(operation: Operation, identity: Identity) -> None:
    logger.info(
        f"{operation.value} succeeded",
        extra={"identity": identity, "operation": operation.value},
    )

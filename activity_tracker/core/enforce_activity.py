"""Activity Input Enforcement — pure validation rules for store operations.

Invariants:
    - Every check is PURE: raises InvalidInputError or returns normally, no IO
    - Existence checks live in the shell (they need the DB); only input rules live here
    - compute_completion_height is the single source of truth for deadline arithmetic

Design Decisions:
    - Raise instead of returning error dicts: the store is called from HTTP routes,
      so the global exception handler is the single reporting path
"""

from activity_tracker.core.domain_types import (
    BlockHeight, MAX_BLOCK_HEIGHT, MAX_DESCRIPTION_LENGTH, Operation, PriorityLevel,
)
from activity_tracker.core.errors import ErrorContext, InvalidInputError


def check_description(description: str, operation: Operation) -> None:
    """Description must be 1..MAX_DESCRIPTION_LENGTH characters."""
    if not description:
        raise InvalidInputError(
            "Description cannot be empty", "description",
            ErrorContext(operation=operation.value),
        )
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise InvalidInputError(
            f"Description exceeds {MAX_DESCRIPTION_LENGTH} characters "
            f"(got {len(description)})",
            "description",
            ErrorContext(operation=operation.value),
        )


def check_priority_level(level: int) -> PriorityLevel:
    """Priority must be in the closed range [1, 3]."""
    if level < PriorityLevel.LOW or level > PriorityLevel.HIGH:
        raise InvalidInputError(
            f"Priority level must be between {PriorityLevel.LOW.value} and "
            f"{PriorityLevel.HIGH.value} (got {level})",
            "level",
            ErrorContext(operation=Operation.ASSIGN_PRIORITY.value),
        )
    return PriorityLevel(level)


def check_blocks_until_due(blocks_until_due: int) -> None:
    """Deadline offset must be strictly positive."""
    if blocks_until_due <= 0:
        raise InvalidInputError(
            f"blocks_until_due must be greater than 0 (got {blocks_until_due})",
            "blocks_until_due",
            ErrorContext(operation=Operation.ESTABLISH_DEADLINE.value),
        )


def compute_completion_height(
    current_height: BlockHeight, blocks_until_due: int,
) -> BlockHeight:
    """Target height = current + offset. Strictly in the future, never past MAX_BLOCK_HEIGHT."""
    check_blocks_until_due(blocks_until_due)
    target = current_height + blocks_until_due
    if target > MAX_BLOCK_HEIGHT:
        raise InvalidInputError(
            f"Deadline height {target} exceeds maximum {MAX_BLOCK_HEIGHT}",
            "blocks_until_due",
            ErrorContext(operation=Operation.ESTABLISH_DEADLINE.value),
        )
    return BlockHeight(target)

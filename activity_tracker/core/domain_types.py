"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Identity is opaque and compared for equality only (no ordering assumed)
    - BlockHeight is a monotonically non-decreasing counter value in [0, MAX_BLOCK_HEIGHT]
    - PriorityLevel is bounded 1–3
    - Description length bounded by MAX_DESCRIPTION_LENGTH

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - IntEnum for priority: serializes to a bare int in JSON responses
"""

from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Identity = NewType("Identity", str)


# ─── Value Types ─────────────────────────────────────────────────

BlockHeight = NewType("BlockHeight", int)   # 0..MAX_BLOCK_HEIGHT

# Largest value a signed 64-bit BIGINT column holds
MAX_BLOCK_HEIGHT: int = 2**63 - 1

MAX_DESCRIPTION_LENGTH: int = 100
MAX_IDENTITY_LENGTH: int = 128


# ─── Enums ───────────────────────────────────────────────────────

class PriorityLevel(IntEnum):
    """The 3 accepted priority levels."""
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Operation(str, Enum):
    """Store operations — used for logging and error context."""
    REGISTER = "register-activity"
    ASSIGN = "assign-activity"
    MODIFY = "modify-activity"
    CANCEL = "cancel-activity"
    ESTABLISH_DEADLINE = "establish-deadline"
    ASSIGN_PRIORITY = "assign-priority"
    GET_DETAILS = "get-activity-details"
    VERIFY_COMPLETION = "verify-activity-completion"
    CHECK_EXISTENCE = "check-activity-existence"
    GET_PRIORITY = "get-activity-priority"
    GET_DEADLINE = "get-activity-deadline"

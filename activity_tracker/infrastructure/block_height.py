"""Block Height Clock — the "current counter value" supplied to establish-deadline.

Invariants:
    - current() never decreases
    - observe(h) advances to max(current, h); a lower report is ignored
    - Heights outside [0, MAX_BLOCK_HEIGHT] are rejected with InvalidInputError
      before the clock moves

Design Decisions:
    - In-memory singleton initialized on startup, like db_manager
      (single-process uvicorn; the hosting chain is the real source of truth)
"""

import logging

from activity_tracker.core.domain_types import BlockHeight, MAX_BLOCK_HEIGHT
from activity_tracker.core.errors import InvalidInputError

logger = logging.getLogger(__name__)


def _check_height(height: int) -> BlockHeight:
    if height < 0 or height > MAX_BLOCK_HEIGHT:
        raise InvalidInputError(
            f"Block height must be between 0 and {MAX_BLOCK_HEIGHT} (got {height})",
            "block_height",
        )
    return BlockHeight(height)


class BlockHeightClock:
    """Monotonically non-decreasing block height."""

    def __init__(self, start: int = 0):
        self._height = _check_height(start)

    def current(self) -> BlockHeight:
        return self._height

    def observe(self, height: int) -> BlockHeight:
        """Record a height reported by the host. Returns the clock's height afterwards."""
        reported = _check_height(height)
        if reported > self._height:
            self._height = reported
        elif reported < self._height:
            logger.debug(
                f"Ignoring stale block height {reported}",
                extra={"block_height": self._height},
            )
        return self._height


# Singleton (initialized on startup)
block_clock: BlockHeightClock | None = None


def init_block_clock(start: int = 0) -> BlockHeightClock:
    global block_clock
    block_clock = BlockHeightClock(start)
    return block_clock

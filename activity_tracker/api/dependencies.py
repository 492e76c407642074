"""Route Dependencies — resolve the execution context for each store call.

Invariants:
    - Caller identity comes from the X-Caller-Identity header; missing → 400
    - Current block height comes from the clock, advanced by X-Block-Height when sent
    - X-Block-Height outside [0, MAX_BLOCK_HEIGHT] → 400 before the clock is touched
    - One ActivityStore per request, bound to the request's DB session

Design Decisions:
    - Header-based identity: authentication is the host's job, this layer only
      threads the already-resolved principal into the store
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from activity_tracker.core.domain_types import (
    BlockHeight, Identity, MAX_BLOCK_HEIGHT, MAX_IDENTITY_LENGTH,
)
from activity_tracker.infrastructure import block_height
from activity_tracker.infrastructure.database import get_db
from activity_tracker.services.activity_store import ActivityStore
from activity_tracker.services.identity_locks import identity_locks


async def get_caller_identity(
    x_caller_identity: str = Header(min_length=1, max_length=MAX_IDENTITY_LENGTH),
) -> Identity:
    return Identity(x_caller_identity)


async def get_current_height(
    x_block_height: int | None = Header(None, ge=0, le=MAX_BLOCK_HEIGHT),
) -> BlockHeight:
    clock = block_height.block_clock
    if clock is None:
        raise RuntimeError("Block height clock not initialized")
    if x_block_height is not None:
        return clock.observe(x_block_height)
    return clock.current()


async def get_activity_store(
    db: AsyncSession = Depends(get_db),
) -> ActivityStore:
    return ActivityStore(db, identity_locks)

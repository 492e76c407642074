"""Identity Locks — per-identity asyncio mutexes for read-then-write atomicity.

Invariants:
    - Same identity → same lock while any coroutine holds or awaits it
    - Different identities never contend
    - Idle locks are garbage-collected (weak-value registry)

Design Decisions:
    - Per-key mutex over a global lock: calls only ever touch one identity's keys
    - WeakValueDictionary: the registry never grows with the number of identities seen
"""

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator

from activity_tracker.core.domain_types import Identity


class IdentityLocks:
    """Registry of one asyncio.Lock per identity."""

    def __init__(self):
        self._locks: weakref.WeakValueDictionary[Identity, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def lock_for(self, identity: Identity) -> asyncio.Lock:
        lock = self._locks.get(identity)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[identity] = lock
        return lock

    @asynccontextmanager
    async def hold(self, identity: Identity) -> AsyncIterator[None]:
        """Serialize all writers of a single identity."""
        lock = self.lock_for(identity)
        async with lock:
            yield


# Process-wide registry used by the API layer
identity_locks = IdentityLocks()

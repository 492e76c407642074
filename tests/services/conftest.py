"""Service test fixtures — ActivityStore bound to a fresh in-memory database.

Invariants:
    - Each test gets its own IdentityLocks registry (no cross-test lock sharing)
    - store and test_db share one SQLite connection, so writes are visible to both
"""

import pytest

from activity_tracker.services.activity_store import ActivityStore
from activity_tracker.services.identity_locks import IdentityLocks


@pytest.fixture
def locks():
    return IdentityLocks()


@pytest.fixture
async def store(test_session_factory, locks):
    async with test_session_factory() as session:
        yield ActivityStore(session, locks)

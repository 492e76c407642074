"""API test fixtures — FastAPI client over an in-memory database.

Invariants:
    - get_db dependency overridden to use the test DB session
    - db_manager and block_clock singletons patched (lifespan does not run under
      ASGITransport)
    - block_clock starts at START_HEIGHT for every test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

import activity_tracker.infrastructure.block_height as clock_module
import activity_tracker.infrastructure.database as db_module
from activity_tracker.infrastructure.block_height import BlockHeightClock
from activity_tracker.infrastructure.database import (
    DatabaseSessionManager, get_db,
)
from activity_tracker.main import app

START_HEIGHT = 1000


@pytest.fixture
def clock(monkeypatch):
    test_clock = BlockHeightClock(START_HEIGHT)
    monkeypatch.setattr(clock_module, "block_clock", test_clock)
    return test_clock


@pytest.fixture
async def client(test_engine, test_session_factory, clock, monkeypatch):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    monkeypatch.setattr(db_module, "db_manager", fake_manager)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()

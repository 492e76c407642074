"""Activity Database — the async engine and per-request session behind ActivityStore.

Invariants:
    - One session per HTTP request (get_db); ActivityStore commits, this layer only
      rolls back: a failed register/modify/cancel leaves no partial rows behind
    - Store errors (InvalidInput / NotFound / Conflict) surface unchanged after rollback
    - Any other SQLAlchemy failure becomes DatabaseError → 503, tagged with the
      phase that failed (commit / execute / query)
    - health_check() backs GET /health/ready

Design Decisions:
    - Module-level db_manager set by main.lifespan; tests swap in an aiosqlite engine
    - expire_on_commit=False: store methods read columns after commit without a reload
    - Pool sizing only applies to the Postgres deployment; sqlite URLs use defaults
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from activity_tracker.core.errors import ActivityTrackerError, DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAILURE_PHASES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Activity row violates a table constraint", "commit"),
    (OperationalError, "Activity database unreachable", "execute"),
    (DBAPIError, "Activity database driver error", "query"),
    (SQLAlchemyError, "Activity database operation failed", "unknown"),
)


def _to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, message, phase in _FAILURE_PHASES:
        if isinstance(exc, exc_type):
            return DatabaseError(message, phase)
    return DatabaseError("Activity database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine; hands out sessions that roll back on any error."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except ActivityTrackerError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            error = _to_database_error(e)
            logger.error(
                f"Activity DB {error.operation} failed: {e}",
                extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Activity DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Set by main.lifespan
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session for ActivityStore."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session

"""Activity Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ActivityTrackerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and block-height clock initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (domain, validation, catch-all)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from activity_tracker import __version__
from activity_tracker.api.error_handlers import register_error_handlers
from activity_tracker.api.routes import activities, health
from activity_tracker.config import get_settings
from activity_tracker.infrastructure.block_height import init_block_clock
from activity_tracker.infrastructure.database import init_db
from activity_tracker.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_block_clock(settings.block_height_start)
    logger.info("Activity tracker API started")
    yield
    await manager.dispose()
    logger.info("Activity tracker API shutting down")


app = FastAPI(
    title="Activity Tracker API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(activities.router)

register_error_handlers(app)

"""
tracker/main.py

FastAPI application entry point for the health tracker.
Creates database tables on startup and registers routers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from db.models import Base, engine
from tracker.routers.notifications import router as notifications_router
from tracker.routers.reminders import router as reminders_router
from tracker.routers.vitals import router as vitals_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle: startup and shutdown."""
    Base.metadata.create_all(engine)
    logger.info("tracker_starting", database=engine.url.render_as_string())
    yield
    engine.dispose()
    logger.info("tracker_shutting_down")


app = FastAPI(
    title="Health Tracker",
    description="Vital-sign alerting and reminder scheduling service",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(vitals_router)
app.include_router(notifications_router)
app.include_router(reminders_router)

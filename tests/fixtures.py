"""
tests/fixtures.py

Shared test data and helper functions for constructing test payloads.
All tests must use these fixtures instead of hardcoding test values.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.models import Base, ReminderSchedule
from tracker.constants import Frequency, ReminderCategory
from tracker.schemas import VitalSignsIn


def build_vitals(**values: float) -> VitalSignsIn:
    """Build a VitalSignsIn with only the given metrics set."""
    return VitalSignsIn(**values)


def build_reminder(
    time: str = "08:00",
    frequency: Frequency = Frequency.DAILY,
    days_of_week: Optional[list[int]] = None,
    day_of_month: Optional[int] = None,
    is_active: bool = True,
    name: str = "Morning pills",
    user_id: str = "user_001",
) -> ReminderSchedule:
    """Build an unsaved ReminderSchedule with every field set explicitly."""
    return ReminderSchedule(
        user_id=user_id,
        name=name,
        time=time,
        frequency=frequency,
        days_of_week=days_of_week,
        day_of_month=day_of_month,
        is_active=is_active,
        push_notification=True,
        category=ReminderCategory.MEDICATION,
    )


def build_session_factory() -> sessionmaker[Session]:
    """In-memory SQLite database shared across threads, schema created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(engine, expire_on_commit=False)


# ── Test users ───────────────────────────────────────────────

TEST_USER_ID: str = "user_001"
OTHER_USER_ID: str = "user_002"

# ── Test clock ───────────────────────────────────────────────
# 2024-06-12 is a Wednesday (day_of_week 3), 2024-06-11 a Tuesday (2)

WEDNESDAY_0930: datetime = datetime(2024, 6, 12, 9, 30)
TUESDAY_0930: datetime = datetime(2024, 6, 11, 9, 30)
MORNING_0730: datetime = datetime(2024, 6, 12, 7, 30)
MORNING_0815: datetime = datetime(2024, 6, 12, 8, 15)

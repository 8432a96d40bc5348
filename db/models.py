"""
db/models.py

SQLAlchemy 2.0 ORM model definitions.
Tables are created on application startup (see tracker/main.py).
"""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from config import settings
from tracker.constants import (
    NOTES_MAX_LEN,
    NOTIFICATION_MESSAGE_MAX_LEN,
    NOTIFICATION_TITLE_MAX_LEN,
    REMINDER_DESCRIPTION_MAX_LEN,
    REMINDER_NAME_MAX_LEN,
    Frequency,
    Metric,
    NotificationType,
    ReminderCategory,
    Severity,
)


def _connect_args(url: str) -> dict[str, Any]:
    # SQLite connections are shared across FastAPI's threadpool workers
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    echo=settings.database_echo,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(
    engine,
    expire_on_commit=False,
)


def _enum_column(enum_cls: type) -> Enum:
    """Store enums by value as plain strings."""
    return Enum(
        enum_cls,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
        length=32,
    )


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class VitalReading(Base):
    """One timestamped submission of vital-sign values."""

    __tablename__ = "vital_readings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    blood_pressure_systolic: Mapped[float | None] = mapped_column(Float, nullable=True)
    blood_pressure_diastolic: Mapped[float | None] = mapped_column(
        Float, nullable=True
    )
    heart_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    blood_sugar: Mapped[float | None] = mapped_column(Float, nullable=True)
    oxygen_saturation: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(NOTES_MAX_LEN), nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    is_abnormal: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def metrics(self) -> dict[Metric, float]:
        """Sparse mapping of the metric values present on this reading."""
        values = {metric: getattr(self, metric.value) for metric in Metric}
        return {metric: value for metric, value in values.items() if value is not None}


class Notification(Base):
    """A persisted alert shown to the user."""

    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str] = mapped_column(
        String(NOTIFICATION_TITLE_MAX_LEN), nullable=False
    )
    message: Mapped[str] = mapped_column(
        String(NOTIFICATION_MESSAGE_MAX_LEN), nullable=False
    )
    type: Mapped[NotificationType] = mapped_column(
        _enum_column(NotificationType), default=NotificationType.SYSTEM
    )
    severity: Mapped[Severity] = mapped_column(
        _enum_column(Severity), default=Severity.INFO
    )
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    related_vital_id: Mapped[int | None] = mapped_column(
        ForeignKey("vital_readings.id", ondelete="SET NULL"), nullable=True
    )
    # "metadata" is reserved on declarative classes
    details: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, nullable=True
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=datetime.utcnow
    )


class ReminderSchedule(Base):
    """A user-configured recurring reminder."""

    __tablename__ = "reminders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(REMINDER_NAME_MAX_LEN), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(REMINDER_DESCRIPTION_MAX_LEN), nullable=True
    )
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    frequency: Mapped[Frequency] = mapped_column(
        _enum_column(Frequency), default=Frequency.DAILY
    )
    days_of_week: Mapped[list[int] | None] = mapped_column(JSON, nullable=True)
    day_of_month: Mapped[int | None] = mapped_column(Integer, nullable=True)
    push_notification: Mapped[bool] = mapped_column(Boolean, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    category: Mapped[ReminderCategory] = mapped_column(
        _enum_column(ReminderCategory), default=ReminderCategory.OTHER
    )
    last_triggered: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

"""
tracker/schemas.py

Pydantic data models for the tracker API.
- Vital*: vital-sign submission, edit and read models
- Reminder*: reminder schedule create/update/read models
- Notification*: alert read models
- VitalAlert: alert record built by the notification emitter before persistence
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from tracker.constants import (
    METRIC_INPUT_RANGES,
    NOTES_MAX_LEN,
    NOTIFICATION_MESSAGE_MAX_LEN,
    NOTIFICATION_TITLE_MAX_LEN,
    REMINDER_DESCRIPTION_MAX_LEN,
    REMINDER_NAME_MAX_LEN,
    REMINDER_TIME_PATTERN,
    Frequency,
    Metric,
    NotificationType,
    ReminderCategory,
    Severity,
)


def _metric_field(metric: Metric) -> Any:
    low, high = METRIC_INPUT_RANGES[metric]
    return Field(default=None, ge=low, le=high)


def normalize_time(value: str) -> str:
    """Zero-pad a validated H:MM / HH:MM string to HH:MM."""
    hours, minutes = value.split(":")
    return f"{int(hours):02d}:{minutes}"


# ── Vitals ───────────────────────────────────────────────────


class VitalSignsIn(BaseModel):
    """Vital-sign values submitted by a user. Every metric is optional."""

    blood_pressure_systolic: Optional[float] = _metric_field(
        Metric.BLOOD_PRESSURE_SYSTOLIC
    )
    blood_pressure_diastolic: Optional[float] = _metric_field(
        Metric.BLOOD_PRESSURE_DIASTOLIC
    )
    heart_rate: Optional[float] = _metric_field(Metric.HEART_RATE)
    weight: Optional[float] = _metric_field(Metric.WEIGHT)
    temperature: Optional[float] = _metric_field(Metric.TEMPERATURE)
    blood_sugar: Optional[float] = _metric_field(Metric.BLOOD_SUGAR)
    oxygen_saturation: Optional[float] = _metric_field(Metric.OXYGEN_SATURATION)
    notes: Optional[str] = Field(default=None, max_length=NOTES_MAX_LEN)
    recorded_at: Optional[datetime] = None

    def metrics(self) -> dict[Metric, float]:
        """Sparse mapping of the submitted metric values."""
        values = {metric: getattr(self, metric.value) for metric in Metric}
        return {metric: value for metric, value in values.items() if value is not None}


class VitalReadingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    blood_pressure_systolic: Optional[float] = None
    blood_pressure_diastolic: Optional[float] = None
    heart_rate: Optional[float] = None
    weight: Optional[float] = None
    temperature: Optional[float] = None
    blood_sugar: Optional[float] = None
    oxygen_saturation: Optional[float] = None
    notes: Optional[str] = None
    recorded_at: datetime
    is_abnormal: bool
    created_at: Optional[datetime] = None


class VitalSubmissionResponse(BaseModel):
    """Created reading plus the outcome of alert dispatch."""

    reading: VitalReadingOut
    alerts_created: int
    alert_error: Optional[str] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class VitalReadingPage(BaseModel):
    data: list[VitalReadingOut]
    pagination: Pagination


class LatestBloodSugar(BaseModel):
    value: float
    recorded_at: datetime
    days_ago: int


class AverageBloodPressure(BaseModel):
    systolic: int
    diastolic: int


class VitalsStats(BaseModel):
    average_heart_rate: int
    average_blood_pressure: AverageBloodPressure
    average_blood_sugar: int
    latest_blood_sugar: Optional[LatestBloodSugar] = None
    weight_trend: list[float]
    alerts_count: int


# ── Notifications ────────────────────────────────────────────


class VitalAlert(BaseModel):
    """An alert synthesized for one abnormal metric, ready to persist."""

    user_id: str
    title: str = Field(max_length=NOTIFICATION_TITLE_MAX_LEN)
    message: str = Field(max_length=NOTIFICATION_MESSAGE_MAX_LEN)
    type: NotificationType = NotificationType.VITAL_ALERT
    severity: Severity
    related_vital_id: int
    details: dict[str, Any]


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    title: str
    message: str
    type: NotificationType
    severity: Severity
    is_read: bool
    related_vital_id: Optional[int] = None
    metadata: Optional[dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("details", "metadata")
    )
    created_at: Optional[datetime] = None


class NotificationPage(BaseModel):
    data: list[NotificationOut]
    unread_count: int
    pagination: Pagination


# ── Reminders ────────────────────────────────────────────────

DayOfWeek = Annotated[int, Field(ge=0, le=6)]


class ReminderIn(BaseModel):
    """New reminder. days_of_week uses 0 = Sunday .. 6 = Saturday."""

    name: str = Field(min_length=1, max_length=REMINDER_NAME_MAX_LEN)
    description: Optional[str] = Field(
        default=None, max_length=REMINDER_DESCRIPTION_MAX_LEN
    )
    time: str = Field(pattern=REMINDER_TIME_PATTERN)
    frequency: Frequency = Frequency.DAILY
    days_of_week: Optional[list[DayOfWeek]] = None
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    push_notification: bool = True
    category: ReminderCategory = ReminderCategory.OTHER

    @field_validator("time")
    @classmethod
    def _pad_time(cls, value: str) -> str:
        return normalize_time(value)


_CLEARABLE_REMINDER_FIELDS = frozenset({"description", "days_of_week", "day_of_month"})


class ReminderUpdate(BaseModel):
    """Partial reminder update; only fields that are set are applied."""

    name: Optional[str] = Field(
        default=None, min_length=1, max_length=REMINDER_NAME_MAX_LEN
    )
    description: Optional[str] = Field(
        default=None, max_length=REMINDER_DESCRIPTION_MAX_LEN
    )
    time: Optional[str] = Field(default=None, pattern=REMINDER_TIME_PATTERN)
    frequency: Optional[Frequency] = None
    days_of_week: Optional[list[DayOfWeek]] = None
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    push_notification: Optional[bool] = None
    is_active: Optional[bool] = None
    category: Optional[ReminderCategory] = None

    @field_validator("time")
    @classmethod
    def _pad_time(cls, value: Optional[str]) -> Optional[str]:
        return normalize_time(value) if value is not None else None

    def patch(self) -> dict[str, Any]:
        """
        Fields the client sent, ready to apply.

        An explicit null clears optional fields (description, days_of_week,
        day_of_month). Required columns ignore null.
        """
        values = self.model_dump(exclude_unset=True)
        return {
            column: value
            for column, value in values.items()
            if value is not None or column in _CLEARABLE_REMINDER_FIELDS
        }


class ReminderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    name: str
    description: Optional[str] = None
    time: str
    frequency: Frequency
    days_of_week: Optional[list[int]] = None
    day_of_month: Optional[int] = None
    push_notification: bool
    is_active: bool
    category: ReminderCategory
    last_triggered: Optional[datetime] = None
    created_at: Optional[datetime] = None


class ReminderList(BaseModel):
    data: list[ReminderOut]
    count: int

"""
tracker/constants.py

Domain enums, vital-sign threshold tables and input limits.
All clinical numeric values must be referenced from this module.

Two tables are kept on purpose and side by side:
- VITAL_ALERT_LIMITS drives the per-metric alert classifier (warning/critical tiers)
- ABNORMAL_FLAG_BOUNDS drives the single is_abnormal flag stored on a reading
They cover different metrics. Do not derive one from the other.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Metric(str, Enum):
    """Vital-sign metric identifiers."""

    BLOOD_PRESSURE_SYSTOLIC = "blood_pressure_systolic"
    BLOOD_PRESSURE_DIASTOLIC = "blood_pressure_diastolic"
    HEART_RATE = "heart_rate"
    WEIGHT = "weight"
    TEMPERATURE = "temperature"
    BLOOD_SUGAR = "blood_sugar"
    OXYGEN_SATURATION = "oxygen_saturation"


class Severity(str, Enum):
    """Ordered alert tiers: info < warning < critical."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class NotificationType(str, Enum):
    VITAL_ALERT = "vital_alert"
    REMINDER = "reminder"
    APPOINTMENT = "appointment"
    SYSTEM = "system"


class Frequency(str, Enum):
    """Reminder recurrence patterns."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ONCE = "once"


class ReminderCategory(str, Enum):
    MEDICATION = "medication"
    APPOINTMENT = "appointment"
    VITALS = "vitals"
    EXERCISE = "exercise"
    WATER = "water"
    OTHER = "other"


@dataclass(frozen=True)
class MetricBounds:
    """Warning and critical bounds for one metric. Any bound may be omitted."""

    label: str
    unit: str
    warning_min: Optional[float] = None
    warning_max: Optional[float] = None
    critical_min: Optional[float] = None
    critical_max: Optional[float] = None

    def __post_init__(self) -> None:
        ordered = [
            bound
            for bound in (
                self.critical_min,
                self.warning_min,
                self.warning_max,
                self.critical_max,
            )
            if bound is not None
        ]
        if ordered != sorted(ordered):
            raise ValueError(
                f"bounds for {self.label} must satisfy "
                "critical_min <= warning_min <= warning_max <= critical_max"
            )

    @property
    def normal_range(self) -> str:
        """Human-readable warning range, e.g. '60 - 100'."""
        low = _format_bound(self.warning_min)
        high = _format_bound(self.warning_max)
        return f"{low} - {high}"


def _format_bound(bound: Optional[float]) -> str:
    # A zero bound renders as N/A, same as a missing one.
    if not bound:
        return "N/A"
    return f"{bound:g}"


@dataclass(frozen=True)
class FlagBounds:
    """Single low/high cutoff pair used by the abnormal flag."""

    low: Optional[float] = None
    high: Optional[float] = None


# ── Alert classifier table ───────────────────────────────────
VITAL_ALERT_LIMITS: Mapping[Metric, MetricBounds] = MappingProxyType(
    {
        Metric.BLOOD_PRESSURE_SYSTOLIC: MetricBounds(
            label="Blood Pressure (Systolic)",
            unit="mmHg",
            warning_min=90,
            warning_max=140,
            critical_min=80,
            critical_max=180,
        ),
        Metric.BLOOD_PRESSURE_DIASTOLIC: MetricBounds(
            label="Blood Pressure (Diastolic)",
            unit="mmHg",
            warning_min=60,
            warning_max=90,
            critical_min=50,
            critical_max=110,
        ),
        Metric.HEART_RATE: MetricBounds(
            label="Heart Rate",
            unit="bpm",
            warning_min=60,
            warning_max=100,
            critical_min=40,
            critical_max=150,
        ),
        Metric.BLOOD_SUGAR: MetricBounds(
            label="Blood Sugar",
            unit="mg/dL",
            warning_min=70,
            warning_max=140,
            critical_min=50,
            critical_max=200,
        ),
        Metric.WEIGHT: MetricBounds(
            label="Weight",
            unit="kg",
            warning_min=40,
            warning_max=150,
            critical_min=30,
            critical_max=200,
        ),
    }
)

# ── Abnormal flag table ──────────────────────────────────────
# Temperature and oxygen saturation are flagged here but never alerted on.
# Weight is alerted on but never flagged.
ABNORMAL_FLAG_BOUNDS: Mapping[Metric, FlagBounds] = MappingProxyType(
    {
        Metric.BLOOD_PRESSURE_SYSTOLIC: FlagBounds(low=90, high=140),
        Metric.BLOOD_PRESSURE_DIASTOLIC: FlagBounds(low=60, high=90),
        Metric.HEART_RATE: FlagBounds(low=60, high=100),
        Metric.TEMPERATURE: FlagBounds(low=36, high=37.5),
        Metric.BLOOD_SUGAR: FlagBounds(low=70, high=140),
        Metric.OXYGEN_SATURATION: FlagBounds(low=95),
    }
)

# ── Accepted input ranges (inclusive) ────────────────────────
METRIC_INPUT_RANGES: Mapping[Metric, tuple[float, float]] = MappingProxyType(
    {
        Metric.BLOOD_PRESSURE_SYSTOLIC: (0, 300),
        Metric.BLOOD_PRESSURE_DIASTOLIC: (0, 200),
        Metric.HEART_RATE: (0, 300),
        Metric.WEIGHT: (0, 500),
        Metric.TEMPERATURE: (30, 45),
        Metric.BLOOD_SUGAR: (0, 600),
        Metric.OXYGEN_SATURATION: (0, 100),
    }
)

NOTES_MAX_LEN: int = 500
REMINDER_NAME_MAX_LEN: int = 100
REMINDER_DESCRIPTION_MAX_LEN: int = 500
NOTIFICATION_TITLE_MAX_LEN: int = 100
NOTIFICATION_MESSAGE_MAX_LEN: int = 500

# 24-hour clock, single-digit hours accepted ("8:05")
REMINDER_TIME_PATTERN: str = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"

# ── Stats windows (days) ─────────────────────────────────────
STATS_PERIOD_DAYS: Mapping[str, int] = MappingProxyType(
    {"week": 7, "month": 30, "year": 365}
)
WEIGHT_TREND_LEN: int = 7

"""
tracker/services/thresholds.py

Per-metric threshold classifier.
- classify: map one value onto a Verdict using a MetricBounds record
- classify_metric: same, looking bounds up in VITAL_ALERT_LIMITS

Missing, NaN and infinite values are treated as absent and yield None.
"""

import math
from enum import Enum
from numbers import Real
from typing import Optional

from tracker.constants import VITAL_ALERT_LIMITS, Metric, MetricBounds, Severity


class Direction(str, Enum):
    LOW = "low"
    HIGH = "high"


class Verdict(str, Enum):
    """Closed set of classifier outcomes (tier x direction)."""

    CRITICAL_LOW = "critical-low"
    CRITICAL_HIGH = "critical-high"
    WARNING_LOW = "warning-low"
    WARNING_HIGH = "warning-high"
    NORMAL = "normal"

    @property
    def severity(self) -> Optional[Severity]:
        match self:
            case Verdict.CRITICAL_LOW | Verdict.CRITICAL_HIGH:
                return Severity.CRITICAL
            case Verdict.WARNING_LOW | Verdict.WARNING_HIGH:
                return Severity.WARNING
            case Verdict.NORMAL:
                return None

    @property
    def direction(self) -> Optional[Direction]:
        match self:
            case Verdict.CRITICAL_LOW | Verdict.WARNING_LOW:
                return Direction.LOW
            case Verdict.CRITICAL_HIGH | Verdict.WARNING_HIGH:
                return Direction.HIGH
            case Verdict.NORMAL:
                return None

    @property
    def is_normal(self) -> bool:
        return self is Verdict.NORMAL


def usable_value(value: object) -> Optional[float]:
    """Return value as a finite float, or None if it should be treated as absent."""
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def classify(value: object, bounds: MetricBounds) -> Optional[Verdict]:
    """
    Classify a single value against warning/critical bounds.

    Rules are checked in order and the first match wins:
    critical-low, critical-high, warning-low, warning-high, normal.
    All comparisons are strict, so a value equal to a bound stays in the
    inner tier.
    """
    number = usable_value(value)
    if number is None:
        return None

    if bounds.critical_min is not None and number < bounds.critical_min:
        return Verdict.CRITICAL_LOW
    if bounds.critical_max is not None and number > bounds.critical_max:
        return Verdict.CRITICAL_HIGH
    if bounds.warning_min is not None and number < bounds.warning_min:
        return Verdict.WARNING_LOW
    if bounds.warning_max is not None and number > bounds.warning_max:
        return Verdict.WARNING_HIGH
    return Verdict.NORMAL


def classify_metric(metric: Metric | str, value: object) -> Optional[Verdict]:
    """Classify value using the alert table; None for unconfigured metrics."""
    try:
        metric = Metric(metric)
    except ValueError:
        return None
    bounds = VITAL_ALERT_LIMITS.get(metric)
    if bounds is None:
        return None
    return classify(value, bounds)

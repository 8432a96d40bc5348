"""
tests/test_abnormal.py

Unit tests for tracker/services/abnormal.py.
"""

import math

import pytest

from tracker.constants import Metric
from tracker.services.abnormal import is_abnormal


def test_all_normal_reading_is_not_abnormal() -> None:
    """A reading with every metric in range is not abnormal."""
    reading = {
        Metric.BLOOD_PRESSURE_SYSTOLIC: 120,
        Metric.BLOOD_PRESSURE_DIASTOLIC: 80,
        Metric.HEART_RATE: 72,
        Metric.TEMPERATURE: 36.8,
        Metric.BLOOD_SUGAR: 100,
        Metric.OXYGEN_SATURATION: 98,
    }
    assert is_abnormal(reading) is False


def test_empty_reading_is_not_abnormal() -> None:
    """Readings with no usable metrics are not abnormal."""
    assert is_abnormal({}) is False


@pytest.mark.parametrize(
    "metric, value",
    [
        (Metric.BLOOD_PRESSURE_SYSTOLIC, 141),
        (Metric.BLOOD_PRESSURE_SYSTOLIC, 89),
        (Metric.BLOOD_PRESSURE_DIASTOLIC, 91),
        (Metric.HEART_RATE, 59),
        (Metric.TEMPERATURE, 37.6),
        (Metric.TEMPERATURE, 35.9),
        (Metric.BLOOD_SUGAR, 141),
        (Metric.OXYGEN_SATURATION, 94),
    ],
)
def test_single_breach_flags_whole_reading(metric: Metric, value: float) -> None:
    """One out-of-range metric is enough to flag the reading."""
    reading = {Metric.HEART_RATE: 72, metric: value}
    assert is_abnormal(reading) is True


def test_bounds_are_strict() -> None:
    """Values exactly on a flag bound are not abnormal."""
    assert is_abnormal({Metric.TEMPERATURE: 37.5, Metric.HEART_RATE: 100}) is False


def test_temperature_and_oxygen_are_flagged_but_weight_is_not() -> None:
    """The flag table covers different metrics than the alert table."""
    assert is_abnormal({Metric.OXYGEN_SATURATION: 90}) is True
    assert is_abnormal({Metric.WEIGHT: 250}) is False


def test_unusable_values_are_skipped() -> None:
    """NaN, bool and non-numeric values are ignored."""
    assert is_abnormal({Metric.HEART_RATE: math.nan, Metric.BLOOD_SUGAR: None}) is False


def test_string_keys_are_accepted() -> None:
    """Metric names given as plain strings are evaluated."""
    assert is_abnormal({"heart_rate": 130, "unknown": 1}) is True


def test_is_idempotent() -> None:
    """Evaluating the same reading twice gives the same answer."""
    reading = {Metric.HEART_RATE: 130}
    assert is_abnormal(reading) == is_abnormal(reading)
    assert reading == {Metric.HEART_RATE: 130}

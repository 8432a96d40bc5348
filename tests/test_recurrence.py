"""
tests/test_recurrence.py

Unit tests for tracker/services/recurrence.py.
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from tracker.constants import Frequency
from tracker.services.recurrence import (
    current_time,
    day_of_week,
    is_due,
    upcoming_reminders,
)
from tests.fixtures import (
    MORNING_0730,
    MORNING_0815,
    TUESDAY_0930,
    WEDNESDAY_0930,
    build_reminder,
)


def test_daily_reminder_not_due_after_its_time() -> None:
    """A daily reminder whose time has passed is not due."""
    reminder = build_reminder(time="08:00", frequency=Frequency.DAILY)
    assert is_due(reminder, MORNING_0815) is False


def test_daily_reminder_due_before_its_time() -> None:
    """A daily reminder later today is due."""
    reminder = build_reminder(time="08:00", frequency=Frequency.DAILY)
    assert is_due(reminder, MORNING_0730) is True


def test_reminder_at_current_minute_is_still_due() -> None:
    """A reminder set for the current minute is still due."""
    reminder = build_reminder(time="08:15")
    assert is_due(reminder, datetime(2024, 6, 12, 8, 15, 59)) is True


def test_inactive_reminder_is_never_due() -> None:
    """Inactive reminders are never due."""
    reminder = build_reminder(time="23:59", is_active=False)
    assert is_due(reminder, MORNING_0730) is False


def test_weekly_reminder_due_on_listed_day() -> None:
    """Weekly reminders are due only on listed weekdays."""
    reminder = build_reminder(
        time="10:00", frequency=Frequency.WEEKLY, days_of_week=[1, 3, 5]
    )
    assert is_due(reminder, WEDNESDAY_0930) is True
    assert is_due(reminder, TUESDAY_0930) is False


def test_weekly_reminder_after_time_on_listed_day() -> None:
    """A weekly reminder past its time is not due even on a listed day."""
    reminder = build_reminder(
        time="09:00", frequency=Frequency.WEEKLY, days_of_week=[1, 3, 5]
    )
    assert is_due(reminder, WEDNESDAY_0930) is False


def test_weekly_reminder_without_days_is_never_due() -> None:
    """Weekly reminders with no days listed are never due."""
    reminder = build_reminder(time="10:00", frequency=Frequency.WEEKLY)
    assert is_due(reminder, WEDNESDAY_0930) is False


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2024, 1, 15, 6, 0), True),
        (datetime(2024, 2, 15, 6, 0), True),
        (datetime(2024, 6, 14, 6, 0), False),
        (datetime(2024, 6, 16, 6, 0), False),
    ],
)
def test_monthly_reminder_only_on_day_of_month(now: datetime, expected: bool) -> None:
    """Monthly reminders are due only on their day of month."""
    reminder = build_reminder(
        time="07:00", frequency=Frequency.MONTHLY, day_of_month=15
    )
    assert is_due(reminder, now) is expected


def test_once_reminder_is_due_every_day_until_deactivated() -> None:
    """Known quirk: nothing records that a "once" reminder already fired."""
    reminder = build_reminder(time="10:00", frequency=Frequency.ONCE)
    assert is_due(reminder, TUESDAY_0930) is True
    assert is_due(reminder, WEDNESDAY_0930) is True


def test_single_digit_hour_is_compared_as_a_time() -> None:
    """Unpadded hours compare as times, not strings."""
    reminder = build_reminder(time="9:45")
    assert is_due(reminder, WEDNESDAY_0930) is True


def test_evaluation_does_not_mutate_reminder() -> None:
    """Evaluating a reminder leaves it unchanged."""
    reminder = build_reminder(time="10:00", frequency=Frequency.ONCE)
    is_due(reminder, WEDNESDAY_0930)
    assert reminder.is_active is True
    assert reminder.last_triggered is None


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2024, 6, 9), 0),
        (datetime(2024, 6, 10), 1),
        (datetime(2024, 6, 12), 3),
        (datetime(2024, 6, 15), 6),
    ],
)
def test_day_of_week_starts_on_sunday(now: datetime, expected: int) -> None:
    """Day of week is numbered from Sunday = 0."""
    assert day_of_week(now) == expected


def test_upcoming_filters_and_sorts_by_time() -> None:
    """Upcoming keeps due reminders only, sorted by time."""
    reminders = [
        build_reminder(name="late", time="21:00"),
        build_reminder(name="passed", time="08:00"),
        build_reminder(name="soon", time="9:45"),
        build_reminder(name="off", time="12:00", is_active=False),
        build_reminder(
            name="weekly-tuesday",
            time="11:00",
            frequency=Frequency.WEEKLY,
            days_of_week=[2],
        ),
        build_reminder(name="noon", time="12:00", frequency=Frequency.ONCE),
    ]

    due = upcoming_reminders(reminders, WEDNESDAY_0930)

    assert [reminder.name for reminder in due] == ["soon", "noon", "late"]


def test_current_time_uses_configured_zone() -> None:
    """current_time honours the configured timezone."""
    with patch("tracker.services.recurrence.settings") as mock_settings:
        mock_settings.clock_timezone = "Asia/Tokyo"
        now = current_time()
    assert now.tzinfo is not None
    assert now.utcoffset().total_seconds() == 9 * 3600


def test_current_time_defaults_to_local_clock() -> None:
    """current_time falls back to the local clock."""
    with patch("tracker.services.recurrence.settings") as mock_settings:
        mock_settings.clock_timezone = ""
        now = current_time()
    assert now.tzinfo is None

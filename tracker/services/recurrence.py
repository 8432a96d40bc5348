"""
tracker/services/recurrence.py

Reminder recurrence evaluation for the "upcoming today" view.
Pure functions: reminders are read, never modified, and nothing is remembered
between calls.
"""

from datetime import datetime, time
from typing import Iterable, Optional, Protocol, Sequence, TypeVar
from zoneinfo import ZoneInfo

from config import settings
from tracker.constants import Frequency


class ReminderLike(Protocol):
    is_active: bool
    time: str
    frequency: Frequency
    days_of_week: Optional[Sequence[int]]
    day_of_month: Optional[int]


ReminderT = TypeVar("ReminderT", bound=ReminderLike)


def current_time() -> datetime:
    """Server clock, in settings.clock_timezone when configured."""
    if settings.clock_timezone:
        return datetime.now(ZoneInfo(settings.clock_timezone))
    return datetime.now()


def parse_clock(value: str) -> time:
    """Parse 'HH:MM' (or 'H:MM') into a time."""
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def day_of_week(moment: datetime) -> int:
    """Day of week with 0 = Sunday .. 6 = Saturday."""
    return moment.isoweekday() % 7


def is_due(reminder: ReminderLike, now: datetime) -> bool:
    """
    Decide whether a reminder is due later today (or right now).

    A reminder whose time is strictly earlier than now, to the minute,
    has already passed. "once" reminders are due every day until they are
    deactivated; nothing records that they fired.
    """
    if not reminder.is_active:
        return False

    now_clock = time(now.hour, now.minute)
    if parse_clock(reminder.time) < now_clock:
        return False

    match Frequency(reminder.frequency):
        case Frequency.DAILY:
            return True
        case Frequency.WEEKLY:
            return day_of_week(now) in (reminder.days_of_week or ())
        case Frequency.MONTHLY:
            return reminder.day_of_month == now.day
        case Frequency.ONCE:
            return True


def upcoming_reminders(
    reminders: Iterable[ReminderT], now: datetime
) -> list[ReminderT]:
    """Reminders due later today, sorted by time of day."""
    due = [reminder for reminder in reminders if is_due(reminder, now)]
    return sorted(due, key=lambda reminder: parse_clock(reminder.time))

"""
tracker/errors.py

Exceptions raised by the tracker services.
"""


class TrackerError(Exception):
    """Base class for tracker service errors."""


class NotificationDispatchError(TrackerError):
    """The vital reading was saved but its alerts could not be persisted."""

    def __init__(self, reading_id: int, alert_count: int) -> None:
        self.reading_id = reading_id
        self.alert_count = alert_count
        super().__init__(
            f"failed to persist {alert_count} alert(s) for vital reading {reading_id}"
        )

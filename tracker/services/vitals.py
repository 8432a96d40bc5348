"""
tracker/services/vitals.py

Vital-sign submission flow and summary statistics.

Submission:
1. Compute the abnormal flag from the submitted values
2. Persist the reading (commit)
3. Classify each metric and persist the resulting alerts as one batch

Steps 2 and 3 are independent writes. If step 3 fails the reading stays
saved and the failure is reported on the result.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

import numpy as np
import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import Notification, VitalReading
from tracker.constants import STATS_PERIOD_DAYS, WEIGHT_TREND_LEN
from tracker.errors import NotificationDispatchError
from tracker.schemas import (
    AverageBloodPressure,
    LatestBloodSugar,
    VitalSignsIn,
    VitalsStats,
)
from tracker.services.abnormal import is_abnormal
from tracker.services.notification import emit_vital_alerts
from tracker.services.persistence import Repository

logger = structlog.get_logger(__name__)


@dataclass
class VitalSubmission:
    """Outcome of a vitals submission."""

    reading: VitalReading
    alerts: list[Notification] = field(default_factory=list)
    alert_error: Optional[NotificationDispatchError] = None

    @property
    def alerts_dispatched(self) -> bool:
        return self.alert_error is None


def record_vitals(
    session: Session,
    user_id: str,
    payload: VitalSignsIn,
) -> VitalSubmission:
    """Persist a reading and raise alerts for its abnormal metrics."""
    readings: Repository[VitalReading] = Repository(session, VitalReading)
    notifications: Repository[Notification] = Repository(session, Notification)

    metrics = payload.metrics()
    values = payload.model_dump(exclude_none=True)
    values["is_abnormal"] = is_abnormal(metrics)

    try:
        reading = readings.create(user_id=user_id, **values)
    except SQLAlchemyError as exc:
        logger.error(
            "vital_reading_persist_failed",
            user_id=user_id,
            error=str(exc),
        )
        raise
    # Committed; keep it out of any rollback the alert write may trigger
    session.expunge(reading)

    logger.info(
        "vital_reading_persisted",
        user_id=user_id,
        reading_id=reading.id,
        is_abnormal=reading.is_abnormal,
        metrics=[metric.value for metric in metrics],
    )

    submission = VitalSubmission(reading=reading)
    try:
        submission.alerts = emit_vital_alerts(
            notifications, user_id, reading.id, metrics
        )
    except NotificationDispatchError as exc:
        logger.warning(
            "vital_alerts_dispatch_failed",
            user_id=user_id,
            reading_id=reading.id,
            alert_count=exc.alert_count,
        )
        submission.alert_error = exc

    return submission


def _rounded_mean(values: list[float]) -> int:
    if not values:
        return 0
    # Half-up rounding, not numpy's round-half-to-even
    return int(np.floor(np.mean(values) + 0.5))


def summarize_vitals(
    session: Session,
    user_id: str,
    period: str = "week",
    now: Optional[datetime] = None,
) -> VitalsStats:
    """Averages, weight trend and abnormal count over a trailing window."""
    now = now or datetime.utcnow()
    days = STATS_PERIOD_DAYS.get(period, STATS_PERIOD_DAYS["week"])
    start = now - timedelta(days=days)

    readings: Repository[VitalReading] = Repository(session, VitalReading)
    window = readings.find(
        VitalReading.recorded_at >= start,
        order_by=VitalReading.recorded_at.desc(),
        user_id=user_id,
    )
    abnormal_count = readings.count(
        VitalReading.recorded_at >= start,
        user_id=user_id,
        is_abnormal=True,
    )

    def present(column: str) -> list[float]:
        return [
            getattr(reading, column)
            for reading in window
            if getattr(reading, column) is not None
        ]

    weights = present("weight")
    latest_sugar = next(
        (reading for reading in window if reading.blood_sugar is not None), None
    )
    latest = None
    if latest_sugar is not None:
        elapsed = abs(now - latest_sugar.recorded_at)
        latest = LatestBloodSugar(
            value=latest_sugar.blood_sugar,
            recorded_at=latest_sugar.recorded_at,
            days_ago=int(np.ceil(elapsed.total_seconds() / 86400)),
        )

    return VitalsStats(
        average_heart_rate=_rounded_mean(present("heart_rate")),
        average_blood_pressure=AverageBloodPressure(
            systolic=_rounded_mean(present("blood_pressure_systolic")),
            diastolic=_rounded_mean(present("blood_pressure_diastolic")),
        ),
        average_blood_sugar=_rounded_mean(present("blood_sugar")),
        latest_blood_sugar=latest,
        weight_trend=list(reversed(weights[:WEIGHT_TREND_LEN])),
        alerts_count=abnormal_count,
    )

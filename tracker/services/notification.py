"""
tracker/services/notification.py

Vital alert emitter.
- build_vital_alerts: turn classifier verdicts for one reading into alert records
- emit_vital_alerts: persist all alerts for a reading in a single batch write

Alerts for one reading are saved together or not at all.
"""

from typing import Mapping

import structlog
from sqlalchemy.exc import SQLAlchemyError

from db.models import Notification
from tracker.constants import VITAL_ALERT_LIMITS, Metric, Severity
from tracker.errors import NotificationDispatchError
from tracker.schemas import VitalAlert
from tracker.services.persistence import Repository
from tracker.services.thresholds import Direction, classify, usable_value

logger = structlog.get_logger(__name__)


def _format_value(value: float) -> str:
    # Whole numbers without a decimal part, everything else at full precision
    return str(int(value)) if value.is_integer() else repr(value)


def build_vital_alerts(
    user_id: str,
    reading_id: int,
    metrics: Mapping[Metric | str, object],
) -> list[VitalAlert]:
    """Build one VitalAlert per metric whose verdict is not normal."""
    alerts: list[VitalAlert] = []

    for name, raw in metrics.items():
        try:
            metric = Metric(name)
        except ValueError:
            continue
        bounds = VITAL_ALERT_LIMITS.get(metric)
        if bounds is None:
            continue
        verdict = classify(raw, bounds)
        if verdict is None or verdict.is_normal:
            continue

        value = usable_value(raw)
        critical = verdict.severity is Severity.CRITICAL
        direction = verdict.direction.value
        tier_text = "CRITICAL" if critical else "Warning"
        side = "below" if verdict.direction is Direction.LOW else "above"
        threshold = "critical" if critical else "normal"
        action = (
            "Please seek medical attention immediately."
            if critical
            else "Please monitor your health and consult a doctor if this persists."
        )

        alerts.append(
            VitalAlert(
                user_id=user_id,
                title=f"{tier_text}: {bounds.label} is {direction}",
                message=(
                    f"Your {bounds.label} reading of {_format_value(value)} "
                    f"{bounds.unit} is {side} the {threshold} threshold. {action}"
                ),
                severity=verdict.severity,
                related_vital_id=reading_id,
                details={
                    "vital_name": metric.value,
                    "value": value,
                    "unit": bounds.unit,
                    "direction": direction,
                    "normal_range": bounds.normal_range,
                },
            )
        )

    return alerts


def emit_vital_alerts(
    notifications: Repository[Notification],
    user_id: str,
    reading_id: int,
    metrics: Mapping[Metric | str, object],
) -> list[Notification]:
    """
    Build and persist alerts for one reading.

    No store call is made when every metric is normal or absent.
    Raises NotificationDispatchError if the batch write fails.
    """
    alerts = build_vital_alerts(user_id, reading_id, metrics)
    if not alerts:
        return []

    try:
        created = notifications.create_many([alert.model_dump() for alert in alerts])
    except SQLAlchemyError as exc:
        logger.error(
            "vital_alerts_persist_failed",
            user_id=user_id,
            reading_id=reading_id,
            alert_count=len(alerts),
            error=str(exc),
        )
        raise NotificationDispatchError(reading_id, len(alerts)) from exc

    logger.info(
        "vital_alerts_emitted",
        user_id=user_id,
        reading_id=reading_id,
        alert_count=len(created),
        severities=[alert.severity.value for alert in alerts],
    )
    return created

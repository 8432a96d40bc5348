"""
tracker/routers/vitals.py

/vitals endpoints.
Submitting a reading computes its abnormal flag and raises alerts; alert
failures are reported in the response body, not as an HTTP error.
"""

from datetime import datetime
from typing import Literal, Optional

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from config import settings
from db.models import VitalReading
from tracker.deps import SessionDep, UserIdDep, page_count
from tracker.schemas import (
    Pagination,
    VitalReadingOut,
    VitalReadingPage,
    VitalSignsIn,
    VitalsStats,
    VitalSubmissionResponse,
)
from tracker.services.persistence import Repository
from tracker.services.vitals import record_vitals, summarize_vitals

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/vitals", tags=["vitals"])


@router.post(
    "", response_model=VitalSubmissionResponse, status_code=status.HTTP_201_CREATED
)
def create_vitals(
    payload: VitalSignsIn, session: SessionDep, user_id: UserIdDep
) -> VitalSubmissionResponse:
    """Record a reading; alerts are created as a side effect."""
    logger.info("vitals_received", user_id=user_id, metrics=len(payload.metrics()))
    submission = record_vitals(session, user_id, payload)
    return VitalSubmissionResponse(
        reading=VitalReadingOut.model_validate(submission.reading),
        alerts_created=len(submission.alerts),
        alert_error=str(submission.alert_error) if submission.alert_error else None,
    )


@router.get("", response_model=VitalReadingPage)
def list_vitals(
    session: SessionDep,
    user_id: UserIdDep,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    is_abnormal: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.vitals_page_size, ge=1, le=settings.max_page_size),
) -> VitalReadingPage:
    readings: Repository[VitalReading] = Repository(session, VitalReading)

    criteria = []
    if start_date is not None:
        criteria.append(VitalReading.recorded_at >= start_date)
    if end_date is not None:
        criteria.append(VitalReading.recorded_at <= end_date)
    filters: dict[str, object] = {"user_id": user_id}
    if is_abnormal is not None:
        filters["is_abnormal"] = is_abnormal

    rows = readings.find(
        *criteria,
        order_by=VitalReading.recorded_at.desc(),
        offset=(page - 1) * limit,
        limit=limit,
        **filters,
    )
    total = readings.count(*criteria, **filters)
    return VitalReadingPage(
        data=[VitalReadingOut.model_validate(row) for row in rows],
        pagination=Pagination(
            page=page, limit=limit, total=total, pages=page_count(total, limit)
        ),
    )


@router.get("/stats", response_model=VitalsStats)
def vitals_stats(
    session: SessionDep,
    user_id: UserIdDep,
    period: Literal["week", "month", "year"] = "week",
) -> VitalsStats:
    return summarize_vitals(session, user_id, period)


@router.put("/{reading_id}", response_model=VitalReadingOut)
def update_vitals(
    reading_id: int,
    payload: VitalSignsIn,
    session: SessionDep,
    user_id: UserIdDep,
) -> VitalReadingOut:
    """Administrative edit. The stored abnormal flag is left untouched."""
    readings: Repository[VitalReading] = Repository(session, VitalReading)
    patch = payload.model_dump(exclude_unset=True)
    if patch.get("recorded_at") is None:
        patch.pop("recorded_at", None)
    reading = readings.update_one({"id": reading_id, "user_id": user_id}, patch)
    if reading is None:
        raise HTTPException(status_code=404, detail="Vital signs not found")
    logger.info("vital_reading_updated", user_id=user_id, reading_id=reading_id)
    return VitalReadingOut.model_validate(reading)


@router.delete("/{reading_id}")
def delete_vitals(
    reading_id: int, session: SessionDep, user_id: UserIdDep
) -> dict[str, str]:
    readings: Repository[VitalReading] = Repository(session, VitalReading)
    if not readings.delete_one(id=reading_id, user_id=user_id):
        raise HTTPException(status_code=404, detail="Vital signs not found")
    logger.info("vital_reading_deleted", user_id=user_id, reading_id=reading_id)
    return {"status": "deleted"}

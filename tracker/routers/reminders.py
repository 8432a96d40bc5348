"""
tracker/routers/reminders.py

/reminders endpoints: CRUD, toggle, and the "upcoming today" view.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, status

from db.models import ReminderSchedule
from tracker.constants import ReminderCategory
from tracker.deps import SessionDep, UserIdDep
from tracker.schemas import ReminderIn, ReminderList, ReminderOut, ReminderUpdate
from tracker.services.persistence import Repository
from tracker.services.recurrence import current_time, upcoming_reminders

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/reminders", tags=["reminders"])


def _to_list(rows: list[ReminderSchedule]) -> ReminderList:
    return ReminderList(
        data=[ReminderOut.model_validate(row) for row in rows], count=len(rows)
    )


def _get_owned(
    reminders: Repository[ReminderSchedule], reminder_id: int, user_id: str
) -> ReminderSchedule:
    reminder = reminders.find_one(id=reminder_id, user_id=user_id)
    if reminder is None:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return reminder


@router.get("", response_model=ReminderList)
def list_reminders(
    session: SessionDep,
    user_id: UserIdDep,
    category: Optional[ReminderCategory] = None,
    is_active: Optional[bool] = None,
) -> ReminderList:
    reminders: Repository[ReminderSchedule] = Repository(session, ReminderSchedule)
    filters: dict[str, object] = {"user_id": user_id}
    if category is not None:
        filters["category"] = category
    if is_active is not None:
        filters["is_active"] = is_active
    return _to_list(reminders.find(order_by=ReminderSchedule.time, **filters))


@router.get("/upcoming", response_model=ReminderList)
def list_upcoming(session: SessionDep, user_id: UserIdDep) -> ReminderList:
    """Active reminders still due today according to the server clock."""
    reminders: Repository[ReminderSchedule] = Repository(session, ReminderSchedule)
    now = current_time()
    active = reminders.find(user_id=user_id, is_active=True)
    due = upcoming_reminders(active, now)
    logger.info(
        "reminders_upcoming_evaluated",
        user_id=user_id,
        active=len(active),
        due=len(due),
        now=now.isoformat(),
    )
    return _to_list(due)


@router.get("/{reminder_id}", response_model=ReminderOut)
def get_reminder(
    reminder_id: int, session: SessionDep, user_id: UserIdDep
) -> ReminderOut:
    reminders: Repository[ReminderSchedule] = Repository(session, ReminderSchedule)
    return ReminderOut.model_validate(_get_owned(reminders, reminder_id, user_id))


@router.post("", response_model=ReminderOut, status_code=status.HTTP_201_CREATED)
def create_reminder(
    payload: ReminderIn, session: SessionDep, user_id: UserIdDep
) -> ReminderOut:
    reminders: Repository[ReminderSchedule] = Repository(session, ReminderSchedule)
    reminder = reminders.create(user_id=user_id, is_active=True, **payload.model_dump())
    logger.info(
        "reminder_created",
        user_id=user_id,
        reminder_id=reminder.id,
        frequency=reminder.frequency.value,
    )
    return ReminderOut.model_validate(reminder)


@router.put("/{reminder_id}", response_model=ReminderOut)
def update_reminder(
    reminder_id: int,
    payload: ReminderUpdate,
    session: SessionDep,
    user_id: UserIdDep,
) -> ReminderOut:
    reminders: Repository[ReminderSchedule] = Repository(session, ReminderSchedule)
    reminder = reminders.update_one(
        {"id": reminder_id, "user_id": user_id},
        payload.patch(),
    )
    if reminder is None:
        raise HTTPException(status_code=404, detail="Reminder not found")
    logger.info("reminder_updated", user_id=user_id, reminder_id=reminder_id)
    return ReminderOut.model_validate(reminder)


@router.patch("/{reminder_id}/toggle", response_model=ReminderOut)
def toggle_reminder(
    reminder_id: int, session: SessionDep, user_id: UserIdDep
) -> ReminderOut:
    reminders: Repository[ReminderSchedule] = Repository(session, ReminderSchedule)
    reminder = _get_owned(reminders, reminder_id, user_id)
    reminder = reminders.update_one(
        {"id": reminder_id, "user_id": user_id},
        {"is_active": not reminder.is_active},
    )
    logger.info(
        "reminder_toggled",
        user_id=user_id,
        reminder_id=reminder_id,
        is_active=reminder.is_active,
    )
    return ReminderOut.model_validate(reminder)


@router.delete("/{reminder_id}")
def delete_reminder(
    reminder_id: int, session: SessionDep, user_id: UserIdDep
) -> dict[str, str]:
    reminders: Repository[ReminderSchedule] = Repository(session, ReminderSchedule)
    if not reminders.delete_one(id=reminder_id, user_id=user_id):
        raise HTTPException(status_code=404, detail="Reminder not found")
    logger.info("reminder_deleted", user_id=user_id, reminder_id=reminder_id)
    return {"status": "deleted"}

"""
tracker/routers/notifications.py

/notifications endpoints: list, unread count, mark read, delete.
Notifications are only ever created by the vital alert emitter.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, Query

from config import settings
from db.models import Notification
from tracker.constants import NotificationType
from tracker.deps import SessionDep, UserIdDep, page_count
from tracker.schemas import NotificationOut, NotificationPage, Pagination
from tracker.services.persistence import Repository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationPage)
def list_notifications(
    session: SessionDep,
    user_id: UserIdDep,
    is_read: Optional[bool] = None,
    type_: Optional[NotificationType] = Query(None, alias="type"),
    page: int = Query(1, ge=1),
    limit: int = Query(
        settings.notifications_page_size, ge=1, le=settings.max_page_size
    ),
) -> NotificationPage:
    notifications: Repository[Notification] = Repository(session, Notification)

    filters: dict[str, object] = {"user_id": user_id}
    if is_read is not None:
        filters["is_read"] = is_read
    if type_ is not None:
        filters["type"] = type_

    rows = notifications.find(
        order_by=(Notification.created_at.desc(), Notification.id.desc()),
        offset=(page - 1) * limit,
        limit=limit,
        **filters,
    )
    total = notifications.count(**filters)
    unread = notifications.count(user_id=user_id, is_read=False)
    return NotificationPage(
        data=[NotificationOut.model_validate(row) for row in rows],
        unread_count=unread,
        pagination=Pagination(
            page=page, limit=limit, total=total, pages=page_count(total, limit)
        ),
    )


@router.get("/unread-count")
def unread_count(session: SessionDep, user_id: UserIdDep) -> dict[str, int]:
    notifications: Repository[Notification] = Repository(session, Notification)
    return {"unread_count": notifications.count(user_id=user_id, is_read=False)}


@router.patch("/read-all")
def mark_all_read(session: SessionDep, user_id: UserIdDep) -> dict[str, int]:
    notifications: Repository[Notification] = Repository(session, Notification)
    updated = notifications.update_many(
        {"user_id": user_id, "is_read": False}, {"is_read": True}
    )
    logger.info("notifications_marked_read", user_id=user_id, count=updated)
    return {"updated": updated}


@router.patch("/{notification_id}/read", response_model=NotificationOut)
def mark_read(
    notification_id: int, session: SessionDep, user_id: UserIdDep
) -> NotificationOut:
    notifications: Repository[Notification] = Repository(session, Notification)
    notification = notifications.update_one(
        {"id": notification_id, "user_id": user_id}, {"is_read": True}
    )
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return NotificationOut.model_validate(notification)


@router.delete("/{notification_id}")
def delete_notification(
    notification_id: int, session: SessionDep, user_id: UserIdDep
) -> dict[str, str]:
    notifications: Repository[Notification] = Repository(session, Notification)
    if not notifications.delete_one(id=notification_id, user_id=user_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"status": "deleted"}


@router.delete("")
def delete_all_notifications(
    session: SessionDep, user_id: UserIdDep
) -> dict[str, int]:
    notifications: Repository[Notification] = Repository(session, Notification)
    deleted = notifications.delete_many(user_id=user_id)
    logger.info("notifications_deleted", user_id=user_id, count=deleted)
    return {"deleted": deleted}

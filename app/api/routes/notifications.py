"""Notification routes - The caller's inbox."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import Caller, DBSession
from app.schemas.common import Pagination
from app.schemas.notification import NotificationFilters, NotificationList, NotificationResponse
from app.services.notification_service import NotificationService

router = APIRouter()


@router.get("/", response_model=NotificationList)
async def get_notifications(
    filters: Annotated[NotificationFilters, Query()],
    caller: Caller,
    db: DBSession,
):
    """List the caller's notifications, unread first."""
    service = NotificationService(db)
    notifications, total, unread_count = await service.get_notifications(caller, filters)
    return NotificationList(
        notifications=notifications,
        unread_count=unread_count,
        pagination=Pagination.build(filters, total),
    )


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(notification_id: int, caller: Caller, db: DBSession):
    service = NotificationService(db)
    return await service.mark_read(caller, notification_id)

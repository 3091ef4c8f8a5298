from pydantic import BaseModel, Field
from datetime import datetime

from app.models.notification import NotificationStatus, NotificationType
from app.schemas.common import PageParams, Pagination


class NotificationFilters(PageParams):
    limit: int = Field(20, ge=1, le=100)
    is_read: bool | None = None
    type: NotificationType | None = None


class NotificationResponse(BaseModel):
    """Schema for notification response."""
    id: int
    type: NotificationType
    message: str
    status: NotificationStatus
    is_read: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class NotificationList(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int
    pagination: Pagination

"""Notification service - Reading and acknowledging a user's notifications."""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import CallerContext
from app.exceptions import NotFoundError
from app.models.notification import Notification
from app.schemas.notification import NotificationFilters


class NotificationService:
    """Service class for notification operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_notifications(
        self, ctx: CallerContext, filters: NotificationFilters
    ) -> tuple[list[Notification], int, int]:
        """The caller's notifications, unread first. Returns (page, total, unread_count)."""
        conditions = [Notification.user_id == ctx.user_id]
        if filters.is_read is not None:
            conditions.append(Notification.is_read == filters.is_read)
        if filters.type:
            conditions.append(Notification.type == filters.type)

        total = await self.db.scalar(
            select(func.count()).select_from(Notification).where(*conditions)
        )
        unread_count = await self.db.scalar(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == ctx.user_id, Notification.is_read.is_(False))
        )
        result = await self.db.execute(
            select(Notification)
            .where(*conditions)
            .order_by(Notification.is_read.asc(), Notification.created_at.desc(), Notification.id.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return list(result.scalars().all()), total or 0, unread_count or 0

    async def mark_read(self, ctx: CallerContext, notification_id: int) -> Notification:
        notification = await self.db.get(Notification, notification_id)
        if not notification or notification.user_id != ctx.user_id:
            raise NotFoundError("Notification not found or unauthorized")

        notification.is_read = True
        await self.db.flush()
        await self.db.refresh(notification)
        return notification

"""Domain events emitted by mutations and the dispatcher that consumes them."""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.notification import Notification, NotificationStatus, NotificationType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationEvent:
    """Something a user should hear about."""
    notify_user_id: int
    message: str


@dataclass(frozen=True)
class AppointmentRequested(NotificationEvent):
    appointment_id: int


@dataclass(frozen=True)
class AppointmentUpdated(NotificationEvent):
    appointment_id: int


@dataclass(frozen=True)
class AppointmentCancelled(NotificationEvent):
    appointment_id: int
    reason: str | None = None


@dataclass(frozen=True)
class PaymentInitiated(NotificationEvent):
    payment_id: int
    appointment_id: int


class NotificationDispatcher:
    """Turns events into PENDING notifications for the delivery sink.

    Rows are written through the caller's session so they commit or roll back
    together with the mutation that produced the event.
    """

    def __init__(self, db: AsyncSession, channel: NotificationType = NotificationType.EMAIL):
        self.db = db
        self.channel = channel

    async def dispatch(self, event: NotificationEvent) -> Notification:
        notification = Notification(
            user_id=event.notify_user_id,
            type=self.channel,
            message=event.message,
            status=NotificationStatus.PENDING,
        )
        self.db.add(notification)
        await self.db.flush()
        logger.info(f"Queued {type(event).__name__} notification for user {event.notify_user_id}")
        return notification

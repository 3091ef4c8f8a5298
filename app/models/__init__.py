"""Models package - SQLAlchemy ORM models."""

from app.models.user import User, UserRole
from app.models.professional import Professional, ServiceType
from app.models.appointment import Appointment, AppointmentStatus
from app.models.payment import Payment, PaymentStatus, PaymentMethod
from app.models.notification import Notification, NotificationType, NotificationStatus

__all__ = [
    "User",
    "UserRole",
    "Professional",
    "ServiceType",
    "Appointment",
    "AppointmentStatus",
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
    "Notification",
    "NotificationType",
    "NotificationStatus",
]

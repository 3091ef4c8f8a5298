"""Services package - Business logic layer."""

from app.services.user_service import UserService
from app.services.professional_service import ProfessionalService
from app.services.appointment_service import AppointmentService
from app.services.payment_service import PaymentService
from app.services.notification_service import NotificationService

__all__ = [
    "UserService",
    "ProfessionalService",
    "AppointmentService",
    "PaymentService",
    "NotificationService",
]

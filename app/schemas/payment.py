from pydantic import BaseModel, Field
from datetime import datetime

from app.models.appointment import AppointmentStatus
from app.models.payment import PaymentMethod, PaymentStatus
from app.schemas.common import PageParams, Pagination
from app.schemas.professional import ProfessionalSummary
from app.schemas.user import UserSummary


class PaymentCreate(BaseModel):
    """Schema for recording a payment against an appointment."""
    appointment_id: int = Field(..., gt=0, description="Appointment being paid for")
    amount: float = Field(..., gt=0, description="Amount, must be positive")
    method: PaymentMethod


class PaymentUpdate(BaseModel):
    """Gateway callback payload."""
    status: PaymentStatus | None = None
    transaction_id: str | None = Field(None, max_length=255)


class PaymentFilters(PageParams):
    status: PaymentStatus | None = None


class PaymentResponse(BaseModel):
    """Schema for payment response."""
    id: int
    appointment_id: int
    amount: float
    status: PaymentStatus
    method: PaymentMethod
    transaction_id: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PaymentAppointment(BaseModel):
    """Appointment details shown alongside a payment."""
    id: int
    service_type: str
    date_time: datetime
    status: AppointmentStatus
    customer: UserSummary
    professional: ProfessionalSummary

    class Config:
        from_attributes = True


class PaymentDetailResponse(PaymentResponse):
    appointment: PaymentAppointment


class PaymentList(BaseModel):
    payments: list[PaymentDetailResponse]
    pagination: Pagination

from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from app.config import settings
from app.models.appointment import AppointmentStatus
from app.schemas.common import PageParams, Pagination, to_naive_utc
from app.schemas.payment import PaymentResponse
from app.schemas.professional import ProfessionalSummary
from app.schemas.user import UserSummary

MAX_NOTES_LENGTH = 1000


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment."""
    professional_id: int = Field(..., gt=0, description="Professional to book")
    service_type: str = Field(..., min_length=1, max_length=100, description="Requested service")
    date_time: datetime = Field(..., description="Start of the appointment")
    duration: int = Field(
        settings.default_appointment_duration,
        gt=0,
        description="Length in minutes",
    )
    notes: str | None = Field(None, max_length=MAX_NOTES_LENGTH, description="Optional notes")

    @field_validator("date_time")
    @classmethod
    def must_be_future(cls, value: datetime) -> datetime:
        value = to_naive_utc(value)
        if value <= datetime.utcnow():
            raise ValueError("Appointment must be scheduled for the future")
        return value


class AppointmentUpdate(BaseModel):
    """Schema for updating an appointment."""
    status: AppointmentStatus | None = None
    date_time: datetime | None = None
    duration: int | None = Field(None, gt=0)
    notes: str | None = Field(None, max_length=MAX_NOTES_LENGTH)

    @field_validator("date_time")
    @classmethod
    def normalize_date_time(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class AppointmentCancel(BaseModel):
    """Schema for cancelling an appointment."""
    reason: str | None = Field(None, description="Why the appointment is cancelled")


class AppointmentFilters(PageParams):
    professional_id: int | None = Field(None, gt=0)
    customer_id: int | None = Field(None, gt=0)
    status: AppointmentStatus | None = None
    start_date: datetime | None = Field(None, description="Earliest start (inclusive)")
    end_date: datetime | None = Field(None, description="Latest start (inclusive)")

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_bounds(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class AppointmentResponse(BaseModel):
    """Schema for appointment response."""
    id: int
    customer_id: int
    professional_id: int
    service_type: str
    date_time: datetime
    duration: int
    status: AppointmentStatus
    notes: str | None
    created_at: datetime
    updated_at: datetime
    customer: UserSummary
    professional: ProfessionalSummary
    payment: PaymentResponse | None = None

    class Config:
        from_attributes = True


class AppointmentList(BaseModel):
    appointments: list[AppointmentResponse]
    pagination: Pagination

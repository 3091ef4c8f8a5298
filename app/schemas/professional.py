from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal

from app.models.professional import ServiceType
from app.schemas.common import PageParams, Pagination
from app.schemas.user import UserSummary

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class WorkingHours(BaseModel):
    """Weekly availability of a professional."""
    start: str = Field(..., pattern=TIME_PATTERN, description="Opening time (HH:MM)")
    end: str = Field(..., pattern=TIME_PATTERN, description="Closing time (HH:MM)")
    days: list[Weekday] = Field(..., min_length=1, description="Working weekdays")


class ProfessionalCreate(BaseModel):
    """Schema for creating a professional profile."""
    service_type: ServiceType
    specialization: str | None = Field(None, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    bio: str | None = Field(None, max_length=500)
    working_hours: WorkingHours


class ProfessionalStatusUpdate(BaseModel):
    """Admin toggle for accepting new bookings."""
    is_active: bool


class ProfessionalFilters(PageParams):
    service_type: ServiceType | None = None
    location: str | None = Field(None, description="Case-insensitive substring match")
    is_active: bool = True


class ProfessionalSummary(BaseModel):
    """Professional details nested in appointment responses."""
    id: int
    service_type: ServiceType
    specialization: str | None
    location: str
    user: UserSummary

    class Config:
        from_attributes = True


class ProfessionalResponse(ProfessionalSummary):
    """Schema for professional response."""
    user_id: int
    bio: str | None
    working_hours: WorkingHours
    rating: float | None
    total_reviews: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ProfessionalList(BaseModel):
    professionals: list[ProfessionalResponse]
    pagination: Pagination

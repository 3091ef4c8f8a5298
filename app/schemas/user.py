from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from app.models.user import UserRole
from app.schemas.common import PageParams, Pagination

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SignupRequest(BaseModel):
    """Schema for creating an account."""
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=8, description="At least 8 characters")
    role: UserRole = UserRole.USER
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=255)

    @field_validator("role")
    @classmethod
    def no_self_service_admin(cls, value: UserRole) -> UserRole:
        if value == UserRole.ADMIN:
            raise ValueError("Administrator accounts cannot be created through signup")
        return value


class LoginRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class UserSummary(BaseModel):
    """Contact details nested in other responses."""
    id: int
    name: str | None
    email: str
    phone: str | None = None

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    """Schema for user response."""
    role: UserRole
    address: str | None = None
    created_at: datetime
    updated_at: datetime


class TokenResponse(BaseModel):
    """Issued after signup or login."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserFilters(PageParams):
    role: UserRole | None = None


class UserList(BaseModel):
    users: list[UserResponse]
    pagination: Pagination

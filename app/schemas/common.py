import math
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from app.config import settings


class PageParams(BaseModel):
    """Offset pagination parameters."""
    page: int = Field(1, ge=1, description="1-based page number")
    limit: int = Field(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Page size",
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Pagination metadata returned with list responses."""
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, params: PageParams, total: int) -> "Pagination":
        return cls(
            page=params.page,
            limit=params.limit,
            total=total,
            pages=math.ceil(total / params.limit),
        )


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Store instants as naive UTC, matching the column defaults."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

"""Professional service - Profiles and discovery."""

import logfire
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth import CallerContext
from app.exceptions import AuthorizationError, ConflictError, NotFoundError
from app.models.professional import Professional
from app.models.user import User, UserRole
from app.schemas.professional import ProfessionalCreate, ProfessionalFilters


class ProfessionalService:
    """Service class for professional operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_professional(self, ctx: CallerContext, data: ProfessionalCreate) -> Professional:
        """Create the caller's professional profile (one per user)."""
        user = await self.db.get(User, ctx.user_id)
        if not user:
            raise NotFoundError("User not found")

        if user.role not in (UserRole.PROFESSIONAL, UserRole.ADMIN):
            raise AuthorizationError("Only professionals can create professional profiles")

        existing = await self.db.execute(
            select(Professional.id).where(Professional.user_id == ctx.user_id)
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("Professional profile already exists")

        professional = Professional(**data.model_dump(), user_id=ctx.user_id)
        self.db.add(professional)
        await self.db.flush()
        logfire.info("professional_created", professional_id=professional.id, user_id=ctx.user_id)
        return await self.get_professional(professional.id)

    async def get_professional_by_id(self, professional_id: int) -> Professional | None:
        """Get a professional with the owning user loaded."""
        result = await self.db.execute(
            select(Professional)
            .where(Professional.id == professional_id)
            .options(selectinload(Professional.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_professional(self, professional_id: int) -> Professional:
        professional = await self.get_professional_by_id(professional_id)
        if not professional:
            raise NotFoundError("Professional not found")
        return professional

    async def get_professionals(
        self, filters: ProfessionalFilters
    ) -> tuple[list[Professional], int]:
        """Best-rated professionals first, filtered and paginated."""
        conditions = [Professional.is_active == filters.is_active]

        if filters.service_type:
            conditions.append(Professional.service_type == filters.service_type)
        if filters.location:
            conditions.append(Professional.location.ilike(f"%{filters.location}%"))

        total = await self.db.scalar(
            select(func.count()).select_from(Professional).where(*conditions)
        )
        result = await self.db.execute(
            select(Professional)
            .where(*conditions)
            .options(selectinload(Professional.user))
            .order_by(
                Professional.rating.desc().nulls_last(),
                Professional.total_reviews.desc(),
                Professional.created_at.desc(),
            )
            .execution_options(populate_existing=True)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return list(result.scalars().all()), total or 0

    async def set_active(self, professional_id: int, is_active: bool) -> Professional:
        """Enable or disable new bookings for a professional."""
        professional = await self.get_professional(professional_id)
        professional.is_active = is_active
        await self.db.flush()
        logfire.info("professional_status_changed", professional_id=professional_id, is_active=is_active)
        return await self.get_professional(professional_id)

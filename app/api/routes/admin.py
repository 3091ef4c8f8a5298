"""Admin routes - Back-office user and professional management."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import AdminCaller, DBSession
from app.schemas.common import Pagination
from app.schemas.professional import ProfessionalResponse, ProfessionalStatusUpdate
from app.schemas.user import UserFilters, UserList
from app.services.professional_service import ProfessionalService
from app.services.user_service import UserService

router = APIRouter()


@router.get("/users", response_model=UserList)
async def get_users(filters: Annotated[UserFilters, Query()], admin: AdminCaller, db: DBSession):
    """List all accounts."""
    service = UserService(db)
    users, total = await service.get_users(filters)
    return UserList(users=users, pagination=Pagination.build(filters, total))


@router.patch("/professionals/{professional_id}", response_model=ProfessionalResponse)
async def set_professional_status(
    professional_id: int,
    status_data: ProfessionalStatusUpdate,
    admin: AdminCaller,
    db: DBSession,
):
    """Activate or deactivate a professional."""
    service = ProfessionalService(db)
    return await service.set_active(professional_id, status_data.is_active)

"""User routes - API endpoints for user operations."""

from fastapi import APIRouter

from app.api.deps import Caller, DBSession
from app.exceptions import NotFoundError
from app.schemas.user import UserResponse
from app.services.user_service import UserService

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user(caller: Caller, db: DBSession):
    """Get the logged-in user's profile."""
    service = UserService(db)
    user = await service.get_user_by_id(caller.user_id)

    if not user:
        raise NotFoundError("User not found")

    return user

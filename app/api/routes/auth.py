"""Auth routes - Signup and login."""

from fastapi import APIRouter

from app.api.deps import DBSession
from app.auth import create_access_token
from app.schemas.user import SignupRequest, LoginRequest, TokenResponse, UserResponse
from app.services.user_service import UserService

router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(user_data: SignupRequest, db: DBSession):
    """Create an account and start a session."""
    service = UserService(db)
    user = await service.signup(user_data)
    return TokenResponse(
        access_token=create_access_token(user.id, user.role),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, db: DBSession):
    """Exchange email and password for an access token."""
    service = UserService(db)
    user = await service.authenticate(credentials.email, credentials.password)
    return TokenResponse(
        access_token=create_access_token(user.id, user.role),
        user=UserResponse.model_validate(user),
    )

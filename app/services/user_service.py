"""User service - Business logic for account operations."""

import logfire
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import hash_password, verify_password
from app.exceptions import AuthenticationRequired, ConflictError
from app.models.user import User
from app.schemas.user import SignupRequest, UserFilters


class UserService:
    """Service class for user operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def signup(self, user_data: SignupRequest) -> User:
        """Create a new account with a hashed password."""
        if await self.get_user_by_email(user_data.email):
            raise ConflictError("User with this email already exists")

        user = User(
            **user_data.model_dump(exclude={"password"}),
            hashed_password=hash_password(user_data.password),
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        logfire.info("user_signed_up", user_id=user.id, role=user.role.value)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the matching user."""
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            logfire.warn("login_failed", email=email)
            raise AuthenticationRequired("Invalid email or password")
        return user

    async def get_user_by_id(self, user_id: int) -> User | None:
        """Get a user by ID."""
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        result = await self.db.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def get_users(self, filters: UserFilters) -> tuple[list[User], int]:
        """Paginated user listing for the back-office."""
        conditions = []
        if filters.role:
            conditions.append(User.role == filters.role)

        total = await self.db.scalar(select(func.count()).select_from(User).where(*conditions))
        result = await self.db.execute(
            select(User)
            .where(*conditions)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return list(result.scalars().all()), total or 0

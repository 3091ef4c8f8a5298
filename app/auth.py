"""Password hashing, access tokens and the per-request caller context."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from app.config import settings
from app.exceptions import AuthenticationRequired
from app.models.user import UserRole

ALGORITHM = "HS256"


@dataclass(frozen=True)
class CallerContext:
    """Identity of the caller, resolved once per request."""
    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))


def create_access_token(user_id: int, role: UserRole) -> str:
    """Issue a signed token carrying the user id and role."""
    expires = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "role": role.value,
        "exp": expires,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> CallerContext:
    """Validate a token and build the caller context from its claims."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
        return CallerContext(user_id=int(payload["sub"]), role=UserRole(payload["role"]))
    except jwt.ExpiredSignatureError:
        raise AuthenticationRequired("Session expired, please log in again")
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise AuthenticationRequired("Invalid authentication token")

"""Shared route dependencies."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import CallerContext, decode_access_token
from app.database import get_db
from app.exceptions import AuthenticationRequired, AuthorizationError

security = HTTPBearer(auto_error=False)

DBSession = Annotated[AsyncSession, Depends(get_db)]


async def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CallerContext:
    """Resolve the bearer token into a caller context."""
    if credentials is None:
        raise AuthenticationRequired("You must be logged in to perform this action")
    return decode_access_token(credentials.credentials)


async def get_admin(caller: Annotated[CallerContext, Depends(get_caller)]) -> CallerContext:
    if not caller.is_admin:
        raise AuthorizationError()
    return caller


Caller = Annotated[CallerContext, Depends(get_caller)]
AdminCaller = Annotated[CallerContext, Depends(get_admin)]

"""
Authentication dependencies for FastAPI route protection.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from movie_tracker.db import get_app_db
from movie_tracker.db_handlers import UserDBHandler
from movie_tracker.models import User
from movie_tracker.utils.auth import extract_user_id_from_token

# HTTP Bearer token extraction; a missing header is reported as 401, not 403
security = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_app_db),
) -> User:
    """
    Dependency to get the current authenticated user from JWT token.
    """
    if credentials is None:
        raise _unauthenticated("Not authenticated")

    # Extract user id from token
    user_id = extract_user_id_from_token(credentials.credentials)
    if user_id is None:
        raise _unauthenticated("Could not validate credentials")

    user = await UserDBHandler().get(user_id, db=db)
    if user is None:
        raise _unauthenticated("User not found")

    return user


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_app_db),
) -> User | None:
    """
    Optional dependency to get the current authenticated user.
    Returns None if no valid token is provided instead of raising an exception.
    """
    if credentials is None:
        return None

    user_id = extract_user_id_from_token(credentials.credentials)
    if user_id is None:
        return None

    return await UserDBHandler().get(user_id, db=db)

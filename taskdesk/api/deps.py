"""API dependencies including authentication and permission checks."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.db import get_db
from taskdesk.models import PermissionKey, User
from taskdesk.services.auth import auth_service
from taskdesk.services.user_service import UserService


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Dependency to get the current authenticated user from cookie."""
    token = request.cookies.get("access_token")

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    user_id = auth_service.user_id_from_token(token)

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    user = await UserService(db).get_by_id(user_id)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
DBSession = Annotated[AsyncSession, Depends(get_db)]


def require_permission(key: PermissionKey):
    """Build a dependency that rejects users lacking `key` with 403."""

    async def checker(current_user: CurrentUser) -> User:
        if not current_user.has_permission(key):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing permission: {key.value}",
            )
        return current_user

    return checker


def get_locale(request: Request) -> str:
    """Resolve the response locale from the Accept-Language header."""
    accept_language = request.headers.get("accept-language", "")
    return "ar" if accept_language.strip().lower().startswith("ar") else "en"


Locale = Annotated[str, Depends(get_locale)]

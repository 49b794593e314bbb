"""Authentication routes."""

from fastapi import APIRouter, HTTPException, Request, Response, status

from taskdesk.api.deps import CurrentUser, DBSession
from taskdesk.config import settings
from taskdesk.schemas.auth import UserLogin, UserResponse
from taskdesk.services.auth import REFRESH, auth_service
from taskdesk.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def set_auth_cookies(response: Response, user_id) -> None:
    """Issue a fresh token pair as HTTP-only cookies."""
    cookies = (
        ("access_token", auth_service.create_access_token(user_id), auth_service.access_ttl),
        ("refresh_token", auth_service.create_refresh_token(user_id), auth_service.refresh_ttl),
    )
    for key, value, ttl in cookies:
        response.set_cookie(
            key=key,
            value=value,
            httponly=True,
            secure=not settings.is_development,  # True for HTTPS in production
            samesite="lax",
            max_age=int(ttl.total_seconds()),
            path="/",
        )


def clear_auth_cookies(response: Response) -> None:
    """Clear authentication cookies."""
    response.delete_cookie(key="access_token", path="/")
    response.delete_cookie(key="refresh_token", path="/")


@router.post("/login", response_model=UserResponse)
async def login(user_data: UserLogin, response: Response, db: DBSession) -> UserResponse:
    """Login and set HTTP-only cookies."""
    user = await UserService(db).authenticate(user_data.email, user_data.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    set_auth_cookies(response, user.id)
    return UserResponse.from_user(user)


@router.post("/refresh", response_model=UserResponse)
async def refresh_token(request: Request, response: Response, db: DBSession) -> UserResponse:
    """Refresh the session using the refresh token cookie."""
    token = request.cookies.get("refresh_token")

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No refresh token provided",
        )

    user_id = auth_service.user_id_from_token(token, REFRESH)
    user = await UserService(db).get_by_id(user_id) if user_id else None

    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    set_auth_cookies(response, user.id)
    return UserResponse.from_user(user)


@router.post("/logout")
async def logout(response: Response) -> dict:
    """Logout and clear authentication cookies."""
    clear_auth_cookies(response)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: CurrentUser) -> UserResponse:
    """Get current authenticated user info."""
    return UserResponse.from_user(current_user)

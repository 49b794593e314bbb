"""Employee management routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from taskdesk.api.deps import DBSession, require_permission
from taskdesk.config import settings
from taskdesk.models import PermissionKey, User
from taskdesk.schemas.auth import UserCreate, UserPermissionsUpdate, UserResponse
from taskdesk.schemas.pagination import Page
from taskdesk.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

StaffManager = Annotated[User, Depends(require_permission(PermissionKey.STAFF_MANAGEMENT))]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    current_user: StaffManager,
    db: DBSession,
) -> UserResponse:
    """Create an employee account."""
    service = UserService(db)

    try:
        user = await service.create(data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )

    return UserResponse.from_user(user)


@router.get("", response_model=Page[UserResponse])
async def list_users(
    current_user: StaffManager,
    db: DBSession,
    q: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_per_page, ge=1, le=settings.max_per_page),
) -> Page[UserResponse]:
    """List employees with pagination."""
    users, bounds = await UserService(db).list_users(q, page, per_page)
    return Page[UserResponse](
        data=[UserResponse.from_user(user) for user in users],
        **bounds,
    )


@router.put("/{user_id}/permissions", response_model=UserResponse)
async def update_user_permissions(
    user_id: UUID,
    data: UserPermissionsUpdate,
    current_user: StaffManager,
    db: DBSession,
) -> UserResponse:
    """Replace an employee's permissions."""
    user = await UserService(db).set_permissions(user_id, data.permissions)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return UserResponse.from_user(user)

"""Pydantic schemas for authentication and employees."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from taskdesk.models.permission import PermissionKey
from taskdesk.models.user import UserRole


class UserCreate(BaseModel):
    """Schema for creating an employee account."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    full_name: str | None = Field(None, max_length=200)
    role: UserRole = UserRole.STAFF
    permissions: list[PermissionKey] = Field(default_factory=list)


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr
    password: str


class UserPermissionsUpdate(BaseModel):
    """Schema replacing a user's permission set."""

    permissions: list[PermissionKey]


class UserResponse(BaseModel):
    """Schema for user response."""

    id: UUID
    email: str
    full_name: str | None
    role: UserRole
    is_active: bool
    permissions: list[PermissionKey]
    created_at: datetime

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        """Build a response from a User with its permissions loaded."""
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            is_active=user.is_active,
            permissions=sorted(user.permission_keys, key=lambda k: k.value),
            created_at=user.created_at,
        )

"""User model."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskdesk.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from taskdesk.models.permission import PermissionKey, UserPermission


class UserRole(str, enum.Enum):
    """User role enum."""

    ADMIN = "admin"
    STAFF = "staff"


class User(Base, UUIDMixin, TimestampMixin):
    """User model for authentication and permission checks."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=UserRole.STAFF,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    permissions: Mapped[list["UserPermission"]] = relationship(
        "UserPermission",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        """Admins implicitly hold every permission."""
        return self.role == UserRole.ADMIN

    @property
    def permission_keys(self) -> set["PermissionKey"]:
        """Permission keys granted to this user (requires permissions loaded)."""
        return {p.key for p in self.permissions}

    def has_permission(self, key: "PermissionKey") -> bool:
        """Check whether the user holds a permission."""
        return self.is_admin or key in self.permission_keys

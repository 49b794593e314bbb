"""Permission keys and the user/permission association."""

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskdesk.models.base import Base, UUIDMixin

if TYPE_CHECKING:
    from taskdesk.models.user import User


class PermissionKey(str, enum.Enum):
    """Permission keys checked by the API."""

    PROJECT_CREATE = "project_create"
    PROJECT_UPDATE = "project_update"
    PROJECT_DELETE = "project_delete"
    PROJECT_VIEW = "project_view"
    TASK_CREATE = "task_create"
    TASK_UPDATE = "task_update"
    TASK_DELETE = "task_delete"
    TASK_VIEW = "task_view"
    TASK_COMPLETE = "task_complete"
    LIST_CREATE = "list_create"
    STAFF_MANAGEMENT = "staff_management"


class UserPermission(Base, UUIDMixin):
    """A single permission granted to a user."""

    __tablename__ = "user_permissions"
    __table_args__ = (
        UniqueConstraint("user_id", "key", name="uq_user_permissions_user_key"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    key: Mapped[PermissionKey] = mapped_column(
        Enum(PermissionKey, name="permission_key_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="permissions",
    )

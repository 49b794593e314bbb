"""Project model, the parent collection of tasks."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskdesk.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from taskdesk.models.task import Task


class Project(Base, UUIDMixin, TimestampMixin):
    """Project model - owns an ordered collection of tasks."""

    __tablename__ = "projects"

    name_ar: Mapped[str] = mapped_column(String(200), nullable=False)
    name_en: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # Bumped whenever the order of the project's tasks changes
    tasks_order_version: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0", nullable=False
    )

    # Relationships
    tasks: Mapped[list["Task"]] = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def localized_name(self, locale: str) -> str:
        """Return the project name for a locale."""
        return self.name_ar if locale == "ar" else self.name_en

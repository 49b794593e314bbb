"""Task status lookup model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from taskdesk.models.base import Base, TimestampMixin, UUIDMixin


class TaskStatus(Base, UUIDMixin, TimestampMixin):
    """Task status lookup list entry."""

    __tablename__ = "task_statuses"

    name_ar: Mapped[str] = mapped_column(String(100), nullable=False)
    name_en: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="#64748b")

    def localized_name(self, locale: str) -> str:
        """Return the status name for a locale."""
        return self.name_ar if locale == "ar" else self.name_en

from taskdesk.models.base import Base
from taskdesk.models.user import User, UserRole
from taskdesk.models.permission import PermissionKey, UserPermission
from taskdesk.models.project import Project
from taskdesk.models.task_status import TaskStatus
from taskdesk.models.task import Task, TaskPriority

__all__ = [
    "Base",
    "User",
    "UserRole",
    "PermissionKey",
    "UserPermission",
    "Project",
    "TaskStatus",
    "Task",
    "TaskPriority",
]

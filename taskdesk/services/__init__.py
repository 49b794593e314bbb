from taskdesk.services.auth import AuthService, auth_service
from taskdesk.services.project_service import ProjectService
from taskdesk.services.task_service import TaskService
from taskdesk.services.task_status_service import TaskStatusService
from taskdesk.services.user_service import UserService

__all__ = [
    "AuthService",
    "auth_service",
    "ProjectService",
    "TaskService",
    "TaskStatusService",
    "UserService",
]

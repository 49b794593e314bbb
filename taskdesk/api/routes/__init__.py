from taskdesk.api.routes.auth import router as auth_router
from taskdesk.api.routes.users import router as users_router
from taskdesk.api.routes.projects import router as projects_router
from taskdesk.api.routes.tasks import router as tasks_router
from taskdesk.api.routes.tasks import project_tasks_router
from taskdesk.api.routes.task_statuses import router as task_statuses_router

__all__ = [
    "auth_router",
    "users_router",
    "projects_router",
    "tasks_router",
    "project_tasks_router",
    "task_statuses_router",
]

from taskdesk.schemas.auth import (
    UserCreate,
    UserLogin,
    UserPermissionsUpdate,
    UserResponse,
)
from taskdesk.schemas.pagination import Page, page_bounds
from taskdesk.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectSummary,
)
from taskdesk.schemas.task_status import (
    TaskStatusCreate,
    TaskStatusResponse,
)
from taskdesk.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskDoneRequest,
    TaskResponse,
    ProjectTaskPage,
    TaskOrderRequest,
    TaskReorderRequest,
    TaskOrderResponse,
)

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserPermissionsUpdate",
    "UserResponse",
    "Page",
    "page_bounds",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectSummary",
    "TaskStatusCreate",
    "TaskStatusResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskDoneRequest",
    "TaskResponse",
    "ProjectTaskPage",
    "TaskOrderRequest",
    "TaskReorderRequest",
    "TaskOrderResponse",
]

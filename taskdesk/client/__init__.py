from taskdesk.client.api_client import TaskdeskClient
from taskdesk.client.drag import DragError, DragSurface
from taskdesk.client.errors import (
    ConflictError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    ServerError,
    TaskdeskError,
    ValidationError,
)
from taskdesk.client.order_state import ClientOrderState, OrderSnapshot
from taskdesk.client.table import Column, QueryTable, TableQuery, TableState
from taskdesk.client.task_list import Notification, TaskListController

__all__ = [
    "TaskdeskClient",
    "DragError",
    "DragSurface",
    "ConflictError",
    "NetworkError",
    "NotFoundError",
    "PermissionDeniedError",
    "ServerError",
    "TaskdeskError",
    "ValidationError",
    "ClientOrderState",
    "OrderSnapshot",
    "Column",
    "QueryTable",
    "TableQuery",
    "TableState",
    "Notification",
    "TaskListController",
]

"""Errors raised by the Taskdesk API client."""

import httpx


class TaskdeskError(Exception):
    """Base error for failed API calls."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(TaskdeskError):
    """The request did not complete (connection failure, timeout)."""


class ValidationError(TaskdeskError):
    """The server rejected the request body or parameters."""


class PermissionDeniedError(TaskdeskError):
    """The actor is not authenticated or lacks the required permission."""


class NotFoundError(TaskdeskError):
    """The addressed record does not exist (or no longer exists)."""


class ConflictError(TaskdeskError):
    """The write was based on stale data."""


class ServerError(TaskdeskError):
    """The server failed while handling the request."""


def error_for_response(response: httpx.Response) -> TaskdeskError:
    """Map an unsuccessful response to the matching client error."""
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    message = detail if isinstance(detail, str) else response.reason_phrase or "Request failed"

    code = response.status_code
    if code in (400, 422):
        return ValidationError(message, code)
    if code in (401, 403):
        return PermissionDeniedError(message, code)
    if code == 404:
        return NotFoundError(message, code)
    if code == 409:
        return ConflictError(message, code)
    if code >= 500:
        return ServerError(message, code)
    return TaskdeskError(message, code)

"""
Domain errors raised by the service layer.

Each error carries the HTTP status code the API layer renders it with,
so routes never need to inspect error messages to pick a status.
"""


class TaskboardError(Exception):
    """Base class for all Taskboard service errors."""
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    """Malformed or missing input. Raised before storage is touched."""
    status_code = 400


class UnauthorizedError(TaskboardError):
    """Bad credentials or a missing, invalid or expired access token."""
    status_code = 401


class ForbiddenError(TaskboardError):
    """Authenticated, but the account may not use the API."""
    status_code = 403


class NotFoundError(TaskboardError):
    """Resource absent or not owned by the caller."""
    status_code = 404


class ConflictError(TaskboardError):
    """Unique username or email already taken."""
    status_code = 409

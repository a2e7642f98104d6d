"""
Application error taxonomy

Services raise these; the handlers registered in app.main translate them
into the failure envelope with the matching HTTP status.
"""
from typing import Optional


class AppError(Exception):
    """Base class for errors that map to a known HTTP status"""

    status_code: int = 500
    error: str = "internal_server_error"

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error


class ValidationError(AppError):
    status_code = 400
    error = "validation_error"


class UnauthorizedError(AppError):
    status_code = 401
    error = "unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    error = "forbidden"


class NotFoundError(AppError):
    status_code = 404
    error = "not_found"


class ConflictError(AppError):
    status_code = 409
    error = "conflict"


class RateLimitError(AppError):
    status_code = 429
    error = "rate_limit_exceeded"

    def __init__(self, message: str, retry_after: int):
        super().__init__(message)
        self.retry_after = retry_after

"""Application error taxonomy.

Every error raised by a route handler or dependency is an ``AppError``
subclass; the exception handlers in ``rental_admin.main`` render them as
``{"error": message}`` with the matching HTTP status.
"""

from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Required request fields are missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class AuthenticationError(AppError):
    """Missing, invalid or expired bearer token, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid token"


class AuthorizationError(AppError):
    """Authenticated user lacks the required role."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Unauthorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ServiceUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Database unavailable"


class InternalError(AppError):
    """Unexpected failure. The message never carries internal details."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

"""Application error taxonomy.

Every handler failure is raised as one of these so the client only ever sees a
short, user-safe ``detail`` message. They are ``HTTPException`` subclasses and
carry a default status; a few endpoints answer with a different status for the
same kind of failure and pass ``status_code`` explicitly.
"""

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base class for domain errors."""

    default_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        super().__init__(
            status_code=status_code or self.default_status,
            detail=detail or self.default_detail,
        )


class ValidationError(AppError):
    """Malformed input shape."""

    default_status = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class Unauthorized(AppError):
    """Missing or wrong credential material."""

    default_status = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class InvalidToken(AppError):
    """A session token was presented but could not be verified."""

    default_status = status.HTTP_403_FORBIDDEN
    default_detail = "Invalid token"


class Conflict(AppError):
    """A unique value is already taken."""

    default_status = status.HTTP_409_CONFLICT
    default_detail = "Already exists"


class NotFound(AppError):
    """Referenced entity does not exist."""

    default_status = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InternalError(AppError):
    """Unexpected store or runtime failure."""

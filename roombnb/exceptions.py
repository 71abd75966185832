"""API error taxonomy.

Every error is an ``HTTPException`` so routes and dependencies can raise it
directly; the handlers installed in ``roombnb.main`` render the detail as
``{"message": ...}``.
"""

from fastapi import HTTPException, status


class ApiError(HTTPException):
    """Base class for errors reported to the client."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.message,
            headers=headers,
        )


class MissingParameter(ApiError):
    message = "Missing parameter"


class AlreadyExists(ApiError):
    message = "Already exists"


class NotFound(ApiError):
    # 400 rather than 404: clients of the original API rely on it
    message = "Not found"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class LimitExceeded(ApiError):
    message = "Limit exceeded"


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

"""Interface layer errors.

Maps domain errors onto the HTTP error body
``{"detail": {"code": ..., "message": ..., "errors"?: [...]}}``.
"""

from enum import Enum

import logfire
from fastapi import HTTPException, status

from letters.domain.error import (
    ConflictError,
    DomainError,
    InvalidEmailError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


class ErrorCode(str, Enum):
    """Machine-readable error codes clients branch on."""

    ALREADY_INVITED = "ALREADY_INVITED"
    INVALID_EMAIL = "INVALID_EMAIL"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_TOKEN = "INVALID_TOKEN"
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    UNAUTHORIZED = "UNAUTHORIZED"
    TIMEOUT = "TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def api_error(
    status_code: int,
    code: ErrorCode,
    message: str,
    errors: list[dict[str, str]] | None = None,
) -> HTTPException:
    """Build an HTTPException carrying the standard error body."""
    detail: dict = {"code": code.value, "message": message}
    if errors:
        detail["errors"] = errors
    return HTTPException(status_code=status_code, detail=detail)


def to_http_error(
    error: Exception, not_found_code: ErrorCode = ErrorCode.NOT_FOUND
) -> HTTPException:
    """Translate an error raised by a use case into an HTTP error.

    Args:
        error: The raised error
        not_found_code: Code for NotFoundError; token routes use INVALID_TOKEN

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, InvalidEmailError):
        return api_error(
            status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_EMAIL, str(error), error.errors
        )
    if isinstance(error, ValidationError):
        return api_error(
            status.HTTP_400_BAD_REQUEST,
            ErrorCode.VALIDATION_ERROR,
            str(error),
            error.errors,
        )
    if isinstance(error, ConflictError):
        return api_error(status.HTTP_409_CONFLICT, ErrorCode.ALREADY_INVITED, str(error))
    if isinstance(error, NotFoundError):
        message = (
            "Invitation not found or expired"
            if not_found_code == ErrorCode.INVALID_TOKEN
            else f"{error.resource} not found"
        )
        return api_error(status.HTTP_404_NOT_FOUND, not_found_code, message)
    if isinstance(error, InvalidStateError):
        return api_error(
            status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_STATE, str(error)
        )
    if isinstance(error, UnauthorizedError):
        return api_error(
            status.HTTP_401_UNAUTHORIZED, ErrorCode.UNAUTHORIZED, str(error)
        )
    if isinstance(error, TimeoutError):
        logfire.error("Operation timed out before commit")
        return api_error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            ErrorCode.TIMEOUT,
            "The operation timed out, please retry",
        )

    # Unknown failures: log everything, tell the client nothing
    logfire.error(
        "Unhandled error",
        error=str(error),
        error_type=type(error).__name__,
        domain=isinstance(error, DomainError),
    )
    return api_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR,
        "Internal server error",
    )

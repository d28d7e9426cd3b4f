from fastapi import status
from typing import Any, Optional

from chatbot_blocks.exceptions.base_exception import AppException


class UnauthorizedException(AppException):
    """Missing or invalid acting identity (401)."""
    def __init__(self, message: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED, error_code=error_code)


class NotFoundException(AppException):
    """
    Resource absent, or owned by another tenant (404).

    Ownership failures use this same shape so callers cannot discover
    other tenants' resources.
    """
    def __init__(self, message: str = "Resource not found", error_code: str = "NOT_FOUND"):
        super().__init__(message=message, status_code=status.HTTP_404_NOT_FOUND, error_code=error_code)


class ConflictException(AppException):
    """Structural invariant would be broken, e.g. a second contact block (409)."""
    def __init__(self, message: str = "Conflict", error_code: str = "CONFLICT"):
        super().__init__(message=message, status_code=status.HTTP_409_CONFLICT, error_code=error_code)


class ValidationException(AppException):
    """Input rejected by the validation layer or a semantic rule (400)."""
    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Any] = None,
        error_code: str = "VALIDATION_ERROR"
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            details=details
        )


class TransientException(AppException):
    """Persistence failure or timeout; the caller may retry (503)."""
    def __init__(self, message: str = "Service temporarily unavailable, please retry", error_code: str = "TRANSIENT_ERROR"):
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE, error_code=error_code)


class ForbiddenException(AppException):
    """Authenticated, but the caller's role does not allow the operation (403)."""
    def __init__(self, message: str = "Forbidden", error_code: str = "FORBIDDEN"):
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN, error_code=error_code)

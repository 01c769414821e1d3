# ruff: noqa: D107
"""Base exception classes.

Every application error is an ``HTTPException`` whose ``detail`` is the
structured body the global handler renders. Subclasses only declare their
status, error code and default message.
"""

from typing import Any

from fastapi import HTTPException


class BaseAppException(HTTPException):
    """Base application exception."""

    status_code = 500
    error_code = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details or {}

        super().__init__(
            status_code=type(self).status_code,
            detail={"message": self.message, "error_code": self.error_code, "details": self.details},
        )

    def __str__(self) -> str:
        return self.message


class NotFoundError(BaseAppException):
    """Exception raised when a resource is not found."""

    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource not found"


class ValidationError(BaseAppException):
    """Exception raised when validation fails."""

    status_code = 422
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class ConflictError(BaseAppException):
    """Exception raised when a request conflicts with current state."""

    status_code = 409
    error_code = "CONFLICT"
    default_message = "Request conflicts with current state"

"""Domain errors raised by the service layer.

The HTTP boundary (``comedy_connect.api.errors``) maps each error to its
status code; services never raise ``HTTPException`` themselves.
"""

from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BOOKING_ERROR = "BOOKING_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"


class DomainError(Exception):
    """Base domain error with code, user-safe message and HTTP status."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(DomainError):
    """Bad input or a business-rule violation."""


class BookingError(ValidationError):
    """Booking-specific rule violation (inventory, past shows)."""

    code = ErrorCode.BOOKING_ERROR


class NotFoundError(DomainError):
    """Missing entity, or one the caller is not allowed to know exists."""

    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class ForbiddenError(DomainError):
    code = ErrorCode.FORBIDDEN
    status_code = 403

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class UnauthorizedError(DomainError):
    code = ErrorCode.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)

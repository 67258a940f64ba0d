"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class AuthenticationError(AppError):
    """Missing, invalid or expired credential."""

    def __init__(self, message: str = "Authentication required", details: Any | None = None) -> None:
        super().__init__(code="authentication_error", message=message, status_code=401, details=details)


class AuthorizationError(AppError):
    """Authenticated, but the role does not allow the operation."""

    def __init__(self, message: str = "Administrator role required", details: Any | None = None) -> None:
        super().__init__(code="authorization_error", message=message, status_code=403, details=details)


class InvalidPaymentError(AppError):
    """Payment rejected by a ticket business rule."""

    def __init__(self, message: str = "Invalid payment", details: Any | None = None) -> None:
        super().__init__(code="invalid_payment", message=message, status_code=400, details=details)

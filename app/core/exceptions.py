"""
Custom exception hierarchy for the application.

Each exception carries the HTTP status it maps to; the handler
registered in app.main turns them into JSON error responses.
"""

from typing import Any

from fastapi import status


class NotesAppException(Exception):
    """Base exception for all application exceptions."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(NotesAppException):
    """Raised when input validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(NotesAppException):
    """Raised when the bearer credential is missing, invalid or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "Not authenticated", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class QuotaExceededError(NotesAppException):
    """Raised when tenant exceeds its plan quota."""

    status_code = status.HTTP_402_PAYMENT_REQUIRED


class AuthorizationError(NotesAppException):
    """Raised when user lacks permissions."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Insufficient permissions", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class ResourceNotFoundError(NotesAppException):
    """Raised when a requested resource doesn't exist (or is not visible)."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Resource not found", details: dict[str, Any] | None = None):
        super().__init__(message, details)

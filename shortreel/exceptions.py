"""Domain errors. Raised by repositories/services, rendered as {"error": detail} in main."""
from fastapi import status


class AppException(Exception):
    """Base application error carrying the HTTP status it maps to."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class ValidationError(AppException):
    """Missing or invalid fields, empty comment text, non-positive gift amount."""

    def __init__(self, detail: str = "Validation error"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class AuthError(AppException):
    """Missing, invalid or expired credential."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail)


class NotFoundError(AppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class ConflictError(AppException):
    """Duplicate registration or repeated purchase."""

    def __init__(self, detail: str = "Conflict"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class InsufficientFundsError(AppException):
    def __init__(self, detail: str = "Insufficient balance"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)

# teamboard/core/errors.py
from fastapi import status


class AppError(Exception):
    """Operational error with a client-facing message and an HTTP status."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"


class ErrorResponses:
    """Errors raised from more than one place."""

    @staticmethod
    def user_not_found():
        return AppError("User not found.", status.HTTP_404_NOT_FOUND)

    @staticmethod
    def admin_required():
        return AppError("Admin access required.", status.HTTP_403_FORBIDDEN)

    @staticmethod
    def not_logged_in():
        return AppError("You are not logged in.", status.HTTP_401_UNAUTHORIZED)

    @staticmethod
    def invalid_token():
        return AppError("Invalid token.", status.HTTP_401_UNAUTHORIZED)

    @staticmethod
    def token_expired():
        return AppError("Your token has expired. Please log in again.", status.HTTP_401_UNAUTHORIZED)

    @staticmethod
    def invalid_credentials():
        return AppError("Incorrect email or password.", status.HTTP_401_UNAUTHORIZED)

    @staticmethod
    def password_mismatch():
        return AppError("New passwords do not match.", status.HTTP_400_BAD_REQUEST)

    @staticmethod
    def password_too_short():
        return AppError("Password must be at least 8 characters.", status.HTTP_400_BAD_REQUEST)

    @staticmethod
    def board_not_found():
        return AppError("Board not found.", status.HTTP_404_NOT_FOUND)

"""
Application errors.

Each error carries the HTTP status it maps to and one or more messages.
They are turned into ``{"errors": [{"message": ...}]}`` bodies by the
handlers registered in :mod:`devconnector.main`.
"""
from typing import List, Optional

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    @property
    def errors(self) -> List[dict]:
        return [{"message": self.message}]


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"

    def __init__(self, errors: List[dict]):
        self._errors = errors
        super().__init__(errors[0]["message"] if errors else None)

    @property
    def errors(self) -> List[dict]:
        return self._errors


class DuplicateUser(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidCredentials(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid credentials"


class MissingToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No token header, authorization denied"


class InvalidToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token is not valid, can not authorize the user"


class UserNotFound(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "User not found"


class NoProfile(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Profile not found"


class StoreFailure(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

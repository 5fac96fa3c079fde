# expense_tracker/core/exceptions.py
"""
Domain errors raised by the services.

Each error carries the HTTP status it is rendered with by the exception
handler registered in ``expense_tracker.main``. Storage failures are not
wrapped: ``sqlalchemy.exc.SQLAlchemyError`` propagates as-is.
"""
from typing import Optional

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, hint: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.hint = hint

    def to_dict(self) -> dict:
        body = {"detail": self.detail}
        if self.hint:
            body["hint"] = self.hint
        return body


class ValidationError(AppError):
    """Input is well-formed but not acceptable (e.g. a category the user cannot see)"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """Entity absent, deleted, or not visible to the caller"""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

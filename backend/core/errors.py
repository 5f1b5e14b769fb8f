# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Application error taxonomy.

Workflows raise these instead of ``HTTPException`` so the same code can be
driven from the HTTP layer, the bootstrap script and the tests.  The handlers
registered in main.py turn every ``AppError`` into a structured response:

    {"message": "...", "errors": ["...", ...]}   # "errors" only when present
"""

from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base class for every client-facing failure."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed."

    def __init__(self, message: Optional[str] = None, errors: Optional[list[str]] = None):
        self.message = message or self.default_message
        self.errors = list(errors) if errors else []
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body: dict = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    """Malformed or missing input – the client must fix and retry."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed."


class DuplicateEmail(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email is already in use."


class InvalidCredentials(AppError):
    """Raised for both "no such user" and "wrong password"."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password."


class Unauthenticated(AppError):
    """Missing, malformed, expired or otherwise invalid bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin access required."


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."

"""Exceptions raised by domain services.

Each error carries the HTTP status the API layer reports it with; the
handler registered in :mod:`wrench_forum.main` turns them into JSON
responses.
"""

from __future__ import annotations


class ForumError(RuntimeError):
    """Base exception for expected, user-facing failures."""

    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(ForumError):
    """Raised when submitted data fails a business rule."""

    status_code = 400


class AuthenticationError(ForumError):
    """Raised when credentials are wrong or the account cannot sign in."""

    status_code = 401


class PermissionDeniedError(ForumError):
    """Raised when the acting user lacks the required capability."""

    status_code = 403


class NotFoundError(ForumError):
    """Raised when a referenced entity does not exist or was removed."""

    status_code = 404


class ConflictError(ForumError):
    """Raised when an operation collides with existing state."""

    status_code = 409

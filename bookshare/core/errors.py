"""
Error taxonomy.

Every failure a handler can report maps to one of these classes. The API
layer renders them as ``{"status": "failed", "message": ...}`` with the
class's status code.
"""

from __future__ import annotations


class BookshareError(Exception):
    """Base exception for all expected request failures."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(BookshareError):
    status_code = 400
    default_message = "Bad request"


class Unauthorized(BookshareError):
    """No credential, or credentials that don't check out."""
    status_code = 401
    default_message = "Unauthorized access"


class NotAllowed(BookshareError):
    """Valid identity without the capability the operation needs."""
    status_code = 401
    default_message = "You are not allowed to create books"


class Forbidden(BookshareError):
    """Credential present but failed verification."""
    status_code = 403
    default_message = "Forbidden access"


class NotFound(BookshareError):
    status_code = 404
    default_message = "Not found"


class Conflict(BookshareError):
    status_code = 409
    default_message = "User Already Registered"


class Internal(BookshareError):
    status_code = 500
    default_message = "something is wrong"

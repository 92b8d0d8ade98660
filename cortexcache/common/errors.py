"""
Error Definitions

Every error a handler can raise maps to exactly one HTTP status. The
exception handlers in `cortexcache.main` turn them into plain-text
responses; message and code only ever reach the logs.
"""

from typing import Optional


class AppError(Exception):
    """
    Application Base Exception

    Subclasses fix the HTTP status and error type; callers supply a message
    and a short machine-readable code.
    """

    status_code: int = 500
    error_type: str = "app_error"
    default_message: str = "Application error"
    default_code: str = "internal_error"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class NotFoundError(AppError):
    """Unknown, expired or malformed snippet id (404)."""

    status_code = 404
    error_type = "not_found_error"
    default_message = "Resource not found"
    default_code = "not_found"


class BadRequestError(AppError):
    """Submitted form could not be parsed (400)."""

    status_code = 400
    error_type = "bad_request_error"
    default_message = "Bad request"
    default_code = "bad_request"


class ServerError(AppError):
    """
    Server Error (500)

    The application itself is misconfigured, e.g. a page template that
    was never loaded or a session requested on a route without one.
    """

    status_code = 500
    error_type = "server_error"
    default_message = "Server error"
    default_code = "server_error"

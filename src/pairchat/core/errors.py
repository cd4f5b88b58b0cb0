"""Domain exceptions for Pairchat.

Services raise these; the API layer maps them to an HTTP status and a
``{"error": ...}`` body using ``status_code`` and ``message``.
"""

from __future__ import annotations


class PairchatError(RuntimeError):
    """Base exception for all domain failures."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PairchatError):
    """Raised when required input is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class InvalidUserError(PairchatError):
    """Raised when a user id is not part of the known user set."""

    status_code = 400
    default_message = "Invalid user ID"


class SelfMessageError(PairchatError):
    """Raised when sender and recipient are the same user."""

    status_code = 400
    default_message = "Cannot send message to self"


class NotFoundError(PairchatError):
    """Raised when a message or chat id does not exist."""

    status_code = 404
    default_message = "Not found"


class RateLimitExceededError(PairchatError):
    """Raised when a client has used up its request allowance."""

    status_code = 429
    default_message = "Too many requests, please try again later"

    def __init__(self, retry_after: int, message: str | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(message)


class InternalError(PairchatError):
    """Raised for unexpected faults; details never reach the client."""


__all__ = [
    "PairchatError",
    "ValidationError",
    "InvalidUserError",
    "SelfMessageError",
    "NotFoundError",
    "RateLimitExceededError",
    "InternalError",
]

"""Business logic services for the Pairchat application."""

from .chat_service import ChatQueryService
from .message_service import MessageService
from .rate_limit import RateLimiter, RateLimitResult

__all__ = [
    "ChatQueryService",
    "MessageService",
    "RateLimiter",
    "RateLimitResult",
]

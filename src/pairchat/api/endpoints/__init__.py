"""API endpoint modules."""

from .chats import router as chats_router
from .messages import router as messages_router
from .system import router as system_router

__all__ = [
    "chats_router",
    "messages_router",
    "system_router",
]

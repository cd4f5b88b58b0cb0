"""HTTP boundary for the Pairchat API."""

from .endpoints import chats_router, messages_router, system_router

__all__ = [
    "chats_router",
    "messages_router",
    "system_router",
]

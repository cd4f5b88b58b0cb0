"""Domain records for Pairchat."""

from .chat import Chat, ChatMetadata, ChatSummary, ParticipantStats, pair_key
from .message import Message, MessageStatus
from .rate import RateLimitEntry

__all__ = [
    "Chat",
    "ChatMetadata",
    "ChatSummary",
    "Message",
    "MessageStatus",
    "ParticipantStats",
    "RateLimitEntry",
    "pair_key",
]

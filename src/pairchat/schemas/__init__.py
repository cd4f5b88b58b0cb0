"""Pydantic request and response schemas."""

from .chat import ChatMetadataResponse, ChatSummaryResponse, ParticipantStatsResponse
from .common import ErrorResponse, RateLimitErrorResponse
from .message import MessageCreate, MessageResponse, MessageStatusUpdate

__all__ = [
    "ChatMetadataResponse",
    "ChatSummaryResponse",
    "ErrorResponse",
    "MessageCreate",
    "MessageResponse",
    "MessageStatusUpdate",
    "ParticipantStatsResponse",
    "RateLimitErrorResponse",
]

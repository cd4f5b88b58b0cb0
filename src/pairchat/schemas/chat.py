# src/pairchat/schemas/chat.py
"""Chat listing and metadata schemas.

Responses use camelCase keys on the wire.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from pairchat.models import ChatMetadata, ChatSummary, ParticipantStats


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatSummaryResponse(_CamelModel):
    """One entry of a user's chat list."""

    id: str
    participants: list[str]
    message_count: int
    other_participant: str
    last_message_preview: str | None
    last_message_time: datetime | None

    @classmethod
    def from_domain(cls, summary: ChatSummary) -> ChatSummaryResponse:
        return cls(
            id=summary.id,
            participants=list(summary.participants),
            message_count=summary.message_count,
            other_participant=summary.other_participant,
            last_message_preview=summary.last_message_preview,
            last_message_time=summary.last_message_time,
        )


class ParticipantStatsResponse(_CamelModel):
    user_id: str
    messages_sent: int
    messages_received: int

    @classmethod
    def from_domain(cls, stats: ParticipantStats) -> ParticipantStatsResponse:
        return cls(
            user_id=stats.user_id,
            messages_sent=stats.messages_sent,
            messages_received=stats.messages_received,
        )


class ChatMetadataResponse(_CamelModel):
    """Statistics for a single chat."""

    id: str
    participants: list[str]
    message_count: int
    created_at: datetime | None
    last_activity: datetime | None
    unread_count: int
    participant_stats: list[ParticipantStatsResponse]

    @classmethod
    def from_domain(cls, metadata: ChatMetadata) -> ChatMetadataResponse:
        return cls(
            id=metadata.id,
            participants=list(metadata.participants),
            message_count=metadata.message_count,
            created_at=metadata.created_at,
            last_activity=metadata.last_activity,
            unread_count=metadata.unread_count,
            participant_stats=[
                ParticipantStatsResponse.from_domain(stats)
                for stats in metadata.participant_stats
            ],
        )

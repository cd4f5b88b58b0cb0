# src/pairchat/models/chat.py
"""Two-party chat record and the read-side views derived from it."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime


def pair_key(user_a: str, user_b: str) -> frozenset[str]:
    """Return an order-independent key for a participant pair."""
    return frozenset((user_a, user_b))


@dataclass(frozen=True, slots=True)
class Chat:
    """A conversation between exactly two users.

    ``message_ids`` is append-only and kept in send order.
    """

    id: str
    participants: tuple[str, str]
    message_ids: tuple[str, ...] = ()

    @property
    def key(self) -> frozenset[str]:
        return pair_key(*self.participants)

    @property
    def message_count(self) -> int:
        return len(self.message_ids)

    @property
    def last_message_id(self) -> str | None:
        return self.message_ids[-1] if self.message_ids else None

    def has_participant(self, user_id: str) -> bool:
        return user_id in self.participants

    def other_participant(self, user_id: str) -> str:
        """Return the co-participant of ``user_id``, or ``""`` if there is none."""
        return next((p for p in self.participants if p != user_id), "")

    def with_message(self, message_id: str) -> Chat:
        return replace(self, message_ids=(*self.message_ids, message_id))


@dataclass(frozen=True, slots=True)
class ChatSummary:
    """One row of a user's chat list."""

    id: str
    participants: tuple[str, str]
    message_count: int
    other_participant: str
    last_message_preview: str | None
    last_message_time: datetime | None


@dataclass(frozen=True, slots=True)
class ParticipantStats:
    user_id: str
    messages_sent: int
    messages_received: int


@dataclass(frozen=True, slots=True)
class ChatMetadata:
    """Aggregate statistics for a single chat."""

    id: str
    participants: tuple[str, str]
    message_count: int
    created_at: datetime | None
    last_activity: datetime | None
    unread_count: int
    participant_stats: tuple[ParticipantStats, ...] = ()

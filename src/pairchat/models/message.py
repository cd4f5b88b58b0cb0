# src/pairchat/models/message.py
"""Message record and delivery status."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class MessageStatus(str, Enum):
    """Delivery state of a message; any value may be set at any time."""

    DELIVERED = "delivered"
    READ = "read"
    FAILED = "failed"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


@dataclass(frozen=True, slots=True)
class Message:
    """A single message between two users.

    Instances are immutable snapshots; a status change produces a new record
    that replaces the old one in the store.
    """

    id: str
    sender: str
    recipient: str
    content: str
    status: MessageStatus
    timestamp: datetime

    def with_status(self, status: MessageStatus) -> Message:
        return replace(self, status=status)

    def involves(self, user_id: str) -> bool:
        return user_id in (self.sender, self.recipient)

# src/pairchat/schemas/message.py
"""Message-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from pairchat.models import Message, MessageStatus


class MessageCreate(BaseModel):
    """Schema for sending a new message.

    Fields are optional here so that missing values reach the service layer,
    which reports them as a single validation error.
    """

    sender: str | None = Field(None, description="User id of the sender")
    recipient: str | None = Field(None, description="User id of the recipient")
    content: str | None = Field(None, description="Message text")


class MessageStatusUpdate(BaseModel):
    """Schema for changing the delivery status of a message."""

    status: str | None = Field(None, description="One of: delivered, read, failed")


class MessageResponse(BaseModel):
    """Schema for message information returned by the API."""

    id: str
    sender: str
    recipient: str
    content: str
    status: MessageStatus
    timestamp: datetime

    @classmethod
    def from_domain(cls, message: Message) -> MessageResponse:
        return cls(
            id=message.id,
            sender=message.sender,
            recipient=message.recipient,
            content=message.content,
            status=message.status,
            timestamp=message.timestamp,
        )

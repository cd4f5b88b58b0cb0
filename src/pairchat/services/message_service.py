"""Message creation, chat resolution and status updates."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from pairchat.core.errors import (
    InvalidUserError,
    NotFoundError,
    SelfMessageError,
    ValidationError,
)
from pairchat.db.store import Store
from pairchat.db.time import utcnow
from pairchat.models import Message, MessageStatus

__all__ = ["MessageService", "parse_status"]


def parse_status(value: str | None) -> MessageStatus:
    """Return the ``MessageStatus`` for ``value`` or raise ``ValidationError``."""
    try:
        return MessageStatus(value)
    except ValueError as exc:
        allowed = ", ".join(MessageStatus.values())
        raise ValidationError(f"Invalid status. Status must be one of: {allowed}") from exc


class MessageService:
    """Write-side operations on messages and the chats that group them."""

    def __init__(self, store: Store, clock: Callable[[], datetime] = utcnow) -> None:
        self._store = store
        self._clock = clock

    def send_message(
        self,
        sender: str | None,
        recipient: str | None,
        content: str | None,
    ) -> Message:
        """Store a new message and append it to the pair's chat.

        The chat between sender and recipient is created on first contact.

        Raises:
            ValidationError: If any field is missing or empty.
            InvalidUserError: If either user is unknown.
            SelfMessageError: If sender and recipient are the same user.
        """
        if not sender or not recipient or not content:
            raise ValidationError(
                "Missing required fields: sender, recipient, and content are required"
            )
        if not self._store.user_exists(sender) or not self._store.user_exists(recipient):
            raise InvalidUserError("Invalid sender or recipient")
        if sender == recipient:
            raise SelfMessageError()

        with self._store.locked() as store:
            message = store.add_message(
                Message(
                    id=store.new_id(),
                    sender=sender,
                    recipient=recipient,
                    content=content,
                    status=MessageStatus.DELIVERED,
                    timestamp=self._clock(),
                )
            )
            chat, _ = store.find_or_create_chat(sender, recipient)
            store.append_message_to_chat(chat.id, message.id)
        return message

    def update_message_status(self, message_id: str, status: str | None) -> Message:
        """Overwrite a message's status; any valid status may follow any other.

        Raises:
            ValidationError: If ``status`` is not a known status value.
            NotFoundError: If the message does not exist.
        """
        new_status = parse_status(status)
        with self._store.locked() as store:
            message = store.find_message(message_id)
            if message is None:
                raise NotFoundError("Message not found")
            return store.replace_message(message.with_status(new_status))

    def get_messages_for_user(self, user_id: str) -> list[Message]:
        if not self._store.user_exists(user_id):
            raise InvalidUserError()
        return self._store.messages_for_user(user_id)

    def get_messages_for_chat(self, chat_id: str) -> list[Message]:
        """Return a chat's messages oldest first; equal timestamps keep send order."""
        with self._store.locked() as store:
            chat = store.find_chat(chat_id)
            if chat is None:
                raise NotFoundError("Chat not found")
            messages = store.messages_in_chat(chat)
        return sorted(messages, key=lambda message: message.timestamp)

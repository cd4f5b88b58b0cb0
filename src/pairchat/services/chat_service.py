"""Read-side views over chats: per-user listings and per-chat statistics."""

from __future__ import annotations

from typing import Final

from pairchat.core.errors import InvalidUserError, NotFoundError
from pairchat.db.store import Store
from pairchat.models import (
    ChatMetadata,
    ChatSummary,
    Message,
    MessageStatus,
    ParticipantStats,
)

PREVIEW_LENGTH: Final[int] = 30
PREVIEW_ELLIPSIS: Final[str] = "..."


def preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    """Truncate ``content`` to ``length`` characters, marking any cut with an ellipsis."""
    if len(content) > length:
        return f"{content[:length]}{PREVIEW_ELLIPSIS}"
    return content


class ChatQueryService:
    """Derived, read-only views of the chats in a store."""

    def __init__(self, store: Store) -> None:
        self._store = store

    def list_chats_for_user(self, user_id: str) -> list[ChatSummary]:
        """Summarize every chat ``user_id`` takes part in, in creation order.

        The preview and time come from the most recently appended message.

        Raises:
            InvalidUserError: If the user is unknown.
        """
        if not self._store.user_exists(user_id):
            raise InvalidUserError()

        summaries: list[ChatSummary] = []
        with self._store.locked() as store:
            for chat in store.chats_for_user(user_id):
                last_message: Message | None = None
                if chat.last_message_id is not None:
                    last_message = store.find_message(chat.last_message_id)
                summaries.append(
                    ChatSummary(
                        id=chat.id,
                        participants=chat.participants,
                        message_count=chat.message_count,
                        other_participant=chat.other_participant(user_id),
                        last_message_preview=(
                            preview(last_message.content) if last_message else None
                        ),
                        last_message_time=last_message.timestamp if last_message else None,
                    )
                )
        return summaries

    def get_chat_metadata(self, chat_id: str) -> ChatMetadata:
        """Compute timestamps, unread count and per-participant stats for a chat.

        Raises:
            NotFoundError: If the chat does not exist.
        """
        with self._store.locked() as store:
            chat = store.find_chat(chat_id)
            if chat is None:
                raise NotFoundError("Chat not found")
            messages = store.messages_in_chat(chat)

        timestamps = [message.timestamp for message in messages]
        return ChatMetadata(
            id=chat.id,
            participants=chat.participants,
            message_count=chat.message_count,
            created_at=min(timestamps) if timestamps else None,
            last_activity=max(timestamps) if timestamps else None,
            unread_count=sum(1 for m in messages if m.status is not MessageStatus.READ),
            participant_stats=tuple(
                ParticipantStats(
                    user_id=participant,
                    messages_sent=sum(1 for m in messages if m.sender == participant),
                    messages_received=sum(1 for m in messages if m.recipient == participant),
                )
                for participant in chat.participants
            ),
        )

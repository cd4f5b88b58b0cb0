# src/pairchat/db/store.py
"""In-memory storage for users, messages and chats.

A single ``Store`` instance owns every message and chat record. Records are
frozen dataclasses: updates swap in a new record under the store lock, so a
reference handed to a caller is a consistent snapshot that can be read
without holding the lock.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from threading import RLock

from pairchat.models import Chat, Message, pair_key

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Return a fresh unique identifier for a message or chat."""
    return str(uuid.uuid4())


class Store:
    """Process-wide collections of users, messages and chats.

    Messages and chats are kept in insertion order (``dict`` preserves it),
    indexed by id. Chats are additionally indexed by their unordered
    participant pair so pair lookups do not scan.
    """

    def __init__(
        self,
        users: Iterable[str] = (),
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._users: frozenset[str] = frozenset(users)
        self._messages: dict[str, Message] = {}
        self._chats: dict[str, Chat] = {}
        self._chat_by_pair: dict[frozenset[str], str] = {}
        self._id_factory = id_factory
        self._lock = RLock()

    @contextmanager
    def locked(self) -> Iterator[Store]:
        """Hold the store lock for a multi-step consistent read or write."""
        with self._lock:
            yield self

    def new_id(self) -> str:
        return self._id_factory()

    # --- Users ----------------------------------------------------------------------
    @property
    def users(self) -> frozenset[str]:
        return self._users

    def user_exists(self, user_id: str) -> bool:
        return user_id in self._users

    # --- Messages -------------------------------------------------------------------
    def add_message(self, message: Message) -> Message:
        with self._lock:
            if message.id in self._messages:
                raise ValueError(f"Duplicate message id {message.id!r}")
            self._messages[message.id] = message
            return message

    def find_message(self, message_id: str) -> Message | None:
        with self._lock:
            return self._messages.get(message_id)

    def replace_message(self, message: Message) -> Message:
        """Swap in an updated record for an existing message id."""
        with self._lock:
            if message.id not in self._messages:
                raise KeyError(message.id)
            self._messages[message.id] = message
            return message

    def messages_for_user(self, user_id: str) -> list[Message]:
        """Return messages sent or received by ``user_id`` in storage order."""
        with self._lock:
            return [m for m in self._messages.values() if m.involves(user_id)]

    def messages_in_chat(self, chat: Chat) -> list[Message]:
        """Return the stored messages referenced by ``chat`` in append order."""
        with self._lock:
            return [
                self._messages[message_id]
                for message_id in chat.message_ids
                if message_id in self._messages
            ]

    # --- Chats ----------------------------------------------------------------------
    def find_chat(self, chat_id: str) -> Chat | None:
        with self._lock:
            return self._chats.get(chat_id)

    def find_chat_by_pair(self, user_a: str, user_b: str) -> Chat | None:
        """Return the chat between two users regardless of argument order."""
        with self._lock:
            chat_id = self._chat_by_pair.get(pair_key(user_a, user_b))
            return self._chats.get(chat_id) if chat_id is not None else None

    def add_chat(self, chat: Chat) -> Chat:
        with self._lock:
            if len(chat.key) != 2:
                raise ValueError("A chat needs two distinct participants")
            if chat.key in self._chat_by_pair:
                raise ValueError("A chat already exists for this participant pair")
            self._chats[chat.id] = chat
            self._chat_by_pair[chat.key] = chat.id
            return chat

    def find_or_create_chat(self, user_a: str, user_b: str) -> tuple[Chat, bool]:
        """Return the pair's chat, creating it first if needed.

        Returns ``(chat, created)``. Lookup and insert happen under one lock
        acquisition, so concurrent senders never create two chats for a pair.
        """
        with self._lock:
            chat = self.find_chat_by_pair(user_a, user_b)
            if chat is not None:
                return chat, False
            chat = self.add_chat(Chat(id=self.new_id(), participants=(user_a, user_b)))
            logger.info("Created chat %s for %s and %s", chat.id, user_a, user_b)
            return chat, True

    def append_message_to_chat(self, chat_id: str, message_id: str) -> Chat:
        with self._lock:
            chat = self._chats.get(chat_id)
            if chat is None:
                raise KeyError(chat_id)
            chat = chat.with_message(message_id)
            self._chats[chat_id] = chat
            return chat

    def chats_for_user(self, user_id: str) -> list[Chat]:
        """Return chats containing ``user_id`` in creation order."""
        with self._lock:
            return [c for c in self._chats.values() if c.has_participant(user_id)]

    # --- Maintenance ----------------------------------------------------------------
    def counts(self) -> dict[str, int]:
        with self._lock:
            return {
                "users": len(self._users),
                "messages": len(self._messages),
                "chats": len(self._chats),
            }

    def reset_all(self) -> None:
        """Drop all messages and chats; the user set is left untouched."""
        with self._lock:
            self._messages.clear()
            self._chats.clear()
            self._chat_by_pair.clear()
        logger.info("Store reset: messages and chats cleared")

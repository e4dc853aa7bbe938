"""Message record."""

from __future__ import annotations

from enum import StrEnum

from chat_service.core.models.base import Record


class MessageType(StrEnum):
    """Kind of message payload."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    SYSTEM = "system"


class Message(Record):
    """Single message in a chat.

    ``created_at`` orders message histories; edits only move ``updated_at``.
    """

    chat_id: str
    user_id: str
    content: str
    type: MessageType = MessageType.TEXT
    reply_to_id: str | None = None

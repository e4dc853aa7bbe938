"""Chat record."""

from __future__ import annotations

from pydantic import Field

from chat_service.core.models.base import Record


class Chat(Record):
    """Direct or group conversation.

    ``updated_at`` is refreshed on every change (new member, new last
    message), which makes it the ordering field for chat lists.
    """

    name: str
    creator_id: str
    member_ids: list[str] = Field(default_factory=list)
    is_group: bool = False
    last_message_id: str | None = None

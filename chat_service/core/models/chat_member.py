"""Chat membership record."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from chat_service.core.models.base import Record, utc_now


class ChatMemberRole(StrEnum):
    """Role of a user inside a chat."""

    ADMIN = "admin"
    MEMBER = "member"


class ChatMember(Record):
    """Membership of one user in one chat."""

    chat_id: str
    user_id: str
    role: ChatMemberRole = ChatMemberRole.MEMBER
    joined_at: datetime = Field(default_factory=utc_now)
    is_active: bool = True

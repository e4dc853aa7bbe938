"""Domain records stored in the entity store.

Each record type lives in its own collection, named by the
``COLLECTION`` constants below.
"""

from __future__ import annotations

from .base import Record, utc_now
from .chat import Chat
from .chat_member import ChatMember, ChatMemberRole
from .message import Message, MessageType
from .user import User

USERS = "users"
CHATS = "chats"
CHAT_MEMBERS = "chat_members"
MESSAGES = "messages"

__all__ = [
    "CHATS",
    "CHAT_MEMBERS",
    "MESSAGES",
    "USERS",
    "Chat",
    "ChatMember",
    "ChatMemberRole",
    "Message",
    "MessageType",
    "Record",
    "User",
    "utc_now",
]

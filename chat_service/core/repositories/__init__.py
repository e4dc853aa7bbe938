"""Repository package for the chat data-access layer.

This package contains entity repositories that extend BaseRepository
with domain-specific queries.

Available Repositories:
    - UserRepository: Username/email lookups, activation, password updates
    - ChatRepository: Member lists, last message, paginated chat lists
    - ChatMemberRepository: Memberships and the membership -> chat join
    - MessageRepository: Histories, replies, paginated message lists

Example:
    ```python
    from chat_service.core.database import EntityStore
    from chat_service.core.repositories import MessageRepository

    store = EntityStore()
    messages = MessageRepository(store)
    latest = await messages.get_latest_message(chat_id)
    ```
"""
from __future__ import annotations

from chat_service.core.repositories.chat import ChatFilters, ChatRepository
from chat_service.core.repositories.chat_member import ChatMemberRepository
from chat_service.core.repositories.message import MessageRepository
from chat_service.core.repositories.user import UserRepository

__all__ = [
    "ChatFilters",
    "ChatMemberRepository",
    "ChatRepository",
    "MessageRepository",
    "UserRepository",
]

"""Chat repository: membership lists, last-message tracking, chat lists."""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from chat_service.core.database import BaseRepository, FindOptions, QueryBuilder
from chat_service.core.models import CHATS, Chat
from chat_service.core.pagination.cursor import CHAT_CURSOR_FIELD

if TYPE_CHECKING:
    from chat_service.core.pagination import PaginatedResult, PaginationParams


class ChatFilters(BaseModel):
    """Optional narrowing of a user's chat list.

    Attributes:
        search_term: Case-insensitive substring of the chat name
        is_group: Only group chats (True) or only direct chats (False)
    """

    model_config = ConfigDict(frozen=True)

    search_term: str | None = Field(default=None, min_length=1)
    is_group: bool | None = None


class ChatRepository(BaseRepository[Chat]):
    """Chat-specific repository.

    Example:
        ```python
        chats = ChatRepository(store)
        chat = await chats.create({"name": "Team", "creator_id": uid, "member_ids": [uid]})
        await chats.add_member_to_chat(chat.id, other_uid)
        result = await chats.get_user_chats_paginated(uid, PaginationParams(limit=20))
        ```
    """

    model = Chat
    collection = CHATS

    async def find_by_creator_id(self, creator_id: str) -> list[Chat]:
        return await self.find_all(FindOptions(filter={"creator_id": creator_id}))

    async def find_group_chats(self) -> list[Chat]:
        return await self.find_all(FindOptions(filter={"is_group": True}))

    async def find_direct_chats(self) -> list[Chat]:
        return await self.find_all(FindOptions(filter={"is_group": False}))

    async def find_by_member_id(self, user_id: str) -> list[Chat]:
        """Chats listing ``user_id`` as a member, most recently updated first."""
        options = (
            QueryBuilder.create()
            .where_contains("member_ids", user_id)
            .order_by("updated_at", "desc")
            .build()
        )
        return await self.find_all(options)

    async def update_last_message(self, chat_id: str, message_id: str) -> Chat | None:
        """Point the chat at its newest message and bump ``updated_at``."""
        return await self.update(chat_id, {"last_message_id": message_id})

    async def add_member_to_chat(self, chat_id: str, user_id: str) -> Chat | None:
        """Add ``user_id`` to the member list.

        Idempotent: an existing member leaves the chat untouched.

        Returns:
            The chat, or None if it does not exist
        """
        chat = await self.find_by_id(chat_id)
        if chat is None:
            return None
        if user_id in chat.member_ids:
            return chat

        updated = await self.update(chat_id, {"member_ids": [*chat.member_ids, user_id]})
        self._logger.info(
            "Member added to chat",
            extra={"chat_id": chat_id, "user_id": user_id, "operation": "chat.add_member"},
        )
        return updated

    async def remove_member_from_chat(self, chat_id: str, user_id: str) -> Chat | None:
        """Drop ``user_id`` from the member list; None if the chat does not exist."""
        chat = await self.find_by_id(chat_id)
        if chat is None:
            return None

        updated = await self.update(
            chat_id, {"member_ids": [member for member in chat.member_ids if member != user_id]}
        )
        self._logger.info(
            "Member removed from chat",
            extra={"chat_id": chat_id, "user_id": user_id, "operation": "chat.remove_member"},
        )
        return updated

    async def get_user_chats_paginated(
        self,
        user_id: str,
        params: PaginationParams,
        filters: ChatFilters | None = None,
    ) -> PaginatedResult[Chat]:
        """Cursor-paginated chat list of one user, keyed on ``updated_at``.

        Args:
            user_id: Member whose chats are listed
            params: Parsed pagination request
            filters: Optional name search and group/direct restriction

        Returns:
            Page of chats in ascending ``updated_at`` order; ``total_count``
            counts every chat matching the filters
        """
        builder = QueryBuilder.create().where_contains("member_ids", user_id)
        if filters is not None and filters.search_term:
            builder.where_contains("name", filters.search_term)
        if filters is not None and filters.is_group is not None:
            builder.where_equals("is_group", filters.is_group)

        candidates = self._select(builder.build())
        return self._paginate(candidates, params, CHAT_CURSOR_FIELD)

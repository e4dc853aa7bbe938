"""Message repository: chat histories, replies and message pagination."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chat_service.core.database import BaseRepository, FindOptions
from chat_service.core.models import MESSAGES, Message, MessageType
from chat_service.core.pagination.cursor import MESSAGE_CURSOR_FIELD

if TYPE_CHECKING:
    from chat_service.core.pagination import PaginatedResult, PaginationParams


class MessageRepository(BaseRepository[Message]):
    """Message-specific repository.

    Listing methods default to newest first (``created_at`` desc) unless
    the supplied options choose an order. Replies read oldest first.

    Example:
        ```python
        messages = MessageRepository(store)
        sent = await messages.create({"chat_id": chat.id, "user_id": uid, "content": "hi"})
        latest = await messages.get_latest_message(chat.id)
        ```
    """

    model = Message
    collection = MESSAGES

    def prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data.setdefault("type", MessageType.TEXT)
        return data

    async def find_by_chat_id(self, chat_id: str, options: FindOptions | None = None) -> list[Message]:
        return await self.find_all(self._newest_first(options, chat_id=chat_id))

    async def find_by_user_id(self, user_id: str, options: FindOptions | None = None) -> list[Message]:
        return await self.find_all(self._newest_first(options, user_id=user_id))

    async def find_by_type(self, type: MessageType, options: FindOptions | None = None) -> list[Message]:  # noqa: A002
        return await self.find_all(self._newest_first(options, type=type))

    async def find_replies(self, message_id: str) -> list[Message]:
        """Replies to a message in conversation order."""
        return await self.find_all(
            FindOptions(filter={"reply_to_id": message_id}, order_by="created_at", order_direction="asc")
        )

    async def update_content(self, message_id: str, content: str) -> Message | None:
        """Edit message text; ``created_at`` (the history order) is unchanged."""
        return await self.update(message_id, {"content": content})

    async def get_message_count(self, chat_id: str) -> int:
        return await self.count({"chat_id": chat_id})

    async def get_latest_message(self, chat_id: str) -> Message | None:
        return await self.find_one(self._newest_first(None, chat_id=chat_id))

    async def get_chat_messages_paginated(
        self,
        chat_id: str,
        params: PaginationParams,
    ) -> PaginatedResult[Message]:
        """Cursor-paginated history of one chat, keyed on ``created_at``.

        Items come back oldest first whichever direction was requested;
        ``total_count`` is the number of messages in the chat.

        Example:
            ```python
            first = await repo.get_chat_messages_paginated(chat_id, PaginationParams(limit=2))
            after = CursorCodec.decode(CursorCodec.for_record(first.items[-1], "created_at"))
            second = await repo.get_chat_messages_paginated(
                chat_id, PaginationParams(limit=2, after_cursor=after)
            )
            ```
        """
        candidates = self._select(FindOptions(filter={"chat_id": chat_id}))
        return self._paginate(candidates, params, MESSAGE_CURSOR_FIELD)

    @staticmethod
    def _newest_first(options: FindOptions | None, **match: Any) -> FindOptions:
        options = options or FindOptions()
        return options.merged(
            filter={**(options.filter or {}), **match},
            order_by=options.order_by or "created_at",
            order_direction=options.order_direction if options.order_by else "desc",
        )

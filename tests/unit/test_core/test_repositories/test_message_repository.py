"""Unit tests for MessageRepository."""
from __future__ import annotations

import pytest

from chat_service.core.database import InvalidPaginationArgsError, QueryBuilder
from chat_service.core.models import Message, MessageType
from chat_service.core.pagination import CursorCodec, PaginationParams
from chat_service.core.repositories import MessageRepository


@pytest.fixture
async def history(message_repo: MessageRepository) -> list[Message]:
    """Five messages in chat c1 with created_at t1 < t2 < ... < t5."""
    messages = []
    for i in range(1, 6):
        messages.append(
            await message_repo.create({"chat_id": "c1", "user_id": f"u{i % 2}", "content": f"message {i}"})
        )
    await message_repo.create({"chat_id": "c2", "user_id": "u1", "content": "elsewhere"})
    return messages


def cursor_of(message: Message):
    return CursorCodec.decode(CursorCodec.for_record(message, "created_at"))


class TestMessageQueries:
    """Tests for message lookups."""

    async def test_create_defaults_to_text(self, message_repo: MessageRepository):
        message = await message_repo.create({"chat_id": "c1", "user_id": "u1", "content": "hi"})

        assert message.type is MessageType.TEXT
        assert message.reply_to_id is None

    async def test_find_by_chat_id_newest_first(self, message_repo: MessageRepository, history):
        result = await message_repo.find_by_chat_id("c1")

        assert [m.id for m in result] == [m.id for m in reversed(history)]

    async def test_find_by_chat_id_respects_options(self, message_repo: MessageRepository, history):
        options = QueryBuilder.create().order_by("created_at", "asc").limit(2).build()

        result = await message_repo.find_by_chat_id("c1", options)

        assert [m.id for m in result] == [history[0].id, history[1].id]

    async def test_find_by_user_id(self, message_repo: MessageRepository, history):
        result = await message_repo.find_by_user_id("u0")

        assert [m.content for m in result] == ["message 4", "message 2"]

    async def test_find_by_type(self, message_repo: MessageRepository, history):
        await message_repo.create({"chat_id": "c1", "user_id": "u1", "content": "joined", "type": "system"})

        result = await message_repo.find_by_type(MessageType.SYSTEM)

        assert [m.content for m in result] == ["joined"]

    async def test_find_replies_oldest_first(self, message_repo: MessageRepository, history):
        root = history[0]
        first = await message_repo.create({"chat_id": "c1", "user_id": "u1", "content": "a", "reply_to_id": root.id})
        second = await message_repo.create({"chat_id": "c1", "user_id": "u2", "content": "b", "reply_to_id": root.id})

        assert await message_repo.find_replies(root.id) == [first, second]

    async def test_update_content_keeps_created_at(self, message_repo: MessageRepository, history):
        edited = await message_repo.update_content(history[0].id, "edited")

        assert edited.content == "edited"
        assert edited.created_at == history[0].created_at
        assert edited.updated_at > history[0].updated_at

    async def test_message_count_and_latest(self, message_repo: MessageRepository, history):
        assert await message_repo.get_message_count("c1") == 5
        assert await message_repo.get_latest_message("c1") == history[-1]
        assert await message_repo.get_latest_message("empty") is None

    async def test_where_contains_is_case_insensitive(self, message_repo: MessageRepository):
        await message_repo.create({"chat_id": "c1", "user_id": "u1", "content": "hello world"})
        await message_repo.create({"chat_id": "c1", "user_id": "u1", "content": "goodbye"})

        result = await message_repo.find_all(QueryBuilder.create().where_contains("content", "Hello").build())

        assert [m.content for m in result] == ["hello world"]


class TestChatMessagesPaginated:
    """Tests for get_chat_messages_paginated."""

    async def test_first_page_forward(self, message_repo: MessageRepository, history):
        page = await message_repo.get_chat_messages_paginated("c1", PaginationParams(limit=2))

        assert page.items == history[:2]
        assert page.total_count == 5
        assert page.page_info.has_next_page is True
        assert page.page_info.has_previous_page is False

    async def test_next_page_after_cursor(self, message_repo: MessageRepository, history):
        params = PaginationParams(limit=2, after_cursor=cursor_of(history[1]))

        page = await message_repo.get_chat_messages_paginated("c1", params)

        assert page.items == history[2:4]
        assert page.total_count == 5
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is True

    async def test_last_page_forward(self, message_repo: MessageRepository, history):
        params = PaginationParams(limit=2, after_cursor=cursor_of(history[3]))

        page = await message_repo.get_chat_messages_paginated("c1", params)

        assert page.items == history[4:]
        assert page.page_info.has_next_page is False
        assert page.page_info.has_previous_page is True

    async def test_backward_from_newest(self, message_repo: MessageRepository, history):
        page = await message_repo.get_chat_messages_paginated(
            "c1", PaginationParams(limit=2, direction="backward")
        )

        # Newest two, still in oldest-first display order
        assert page.items == history[3:]
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is False

    async def test_backward_before_cursor(self, message_repo: MessageRepository, history):
        params = PaginationParams(limit=2, before_cursor=cursor_of(history[3]), direction="backward")

        page = await message_repo.get_chat_messages_paginated("c1", params)

        assert page.items == history[1:3]
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is True

    async def test_cursors_point_at_page_bounds(self, message_repo: MessageRepository, history):
        page = await message_repo.get_chat_messages_paginated("c1", PaginationParams(limit=2))

        assert CursorCodec.decode(page.page_info.start_cursor).id == history[0].id
        assert CursorCodec.decode(page.page_info.end_cursor).id == history[1].id

    async def test_empty_chat(self, message_repo: MessageRepository, history):
        page = await message_repo.get_chat_messages_paginated("nope", PaginationParams(limit=2))

        assert page.items == []
        assert page.total_count == 0
        assert page.page_info.start_cursor is None
        assert page.page_info.end_cursor is None
        assert page.page_info.has_next_page is False

    async def test_both_cursors_rejected(self, message_repo: MessageRepository, history):
        with pytest.raises(InvalidPaginationArgsError):
            await message_repo.get_chat_messages_paginated(
                "c1",
                PaginationParams(
                    limit=2,
                    after_cursor=cursor_of(history[0]),
                    before_cursor=cursor_of(history[3]),
                    direction="backward",
                ),
            )

    @pytest.mark.parametrize(
        ("direction", "cursor_field"),
        [("forward", "before_cursor"), ("backward", "after_cursor")],
    )
    async def test_cursor_for_other_direction_rejected(
        self, message_repo: MessageRepository, history, direction, cursor_field
    ):
        with pytest.raises(InvalidPaginationArgsError) as exc_info:
            await message_repo.get_chat_messages_paginated(
                "c1", PaginationParams(limit=2, direction=direction, **{cursor_field: cursor_of(history[2])})
            )

        assert exc_info.value.details == {"direction": direction}

"""Cursor-based pagination for chat lists and message histories.

Pagination here is keyset-style over in-memory records:
- Stable: pages are keyed on (timestamp, id), so inserts don't shift them
- Tie-safe: records sharing a timestamp are ordered by id
- Two shapes: Relay ``Connection`` for resolvers, ``PaginatedResult`` for
  repository callers

Resolver style:
    page = connection_from_args(
        messages, ConnectionArgs(first=20, after=after), MESSAGE_CURSOR_FIELD
    )

Repository style:
    params = parse_pagination_args(ConnectionArgs(last=20))
    result = await message_repo.get_chat_messages_paginated(chat_id, params)

Cursors are opaque base64 strings that clients pass back unchanged.
"""

from chat_service.core.pagination.cursor import (
    CHAT_CURSOR_FIELD,
    MESSAGE_CURSOR_FIELD,
    CursorCodec,
    CursorKey,
    sort_key,
)
from chat_service.core.pagination.engine import (
    build_page,
    connection_from_args,
    paginate,
    parse_pagination_args,
    seek,
)
from chat_service.core.pagination.schemas import (
    Connection,
    ConnectionArgs,
    Direction,
    Edge,
    PageInfo,
    PaginatedResult,
    PaginationParams,
)

__all__ = [
    "CHAT_CURSOR_FIELD",
    "MESSAGE_CURSOR_FIELD",
    # Schemas
    "Connection",
    "ConnectionArgs",
    # Cursor utilities
    "CursorCodec",
    "CursorKey",
    "Direction",
    "Edge",
    "PageInfo",
    "PaginatedResult",
    "PaginationParams",
    # Engine
    "build_page",
    "connection_from_args",
    "paginate",
    "parse_pagination_args",
    "seek",
    "sort_key",
]

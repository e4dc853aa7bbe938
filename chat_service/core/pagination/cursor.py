"""Cursor encoding and decoding for pagination.

A cursor marks the boundary record of a page by its sort key: the
record's ordering timestamp plus its id, which breaks ties between
records sharing a timestamp.

The cursor format is:
1. ``<ISO-8601 timestamp>_<id>``
2. URL-safe base64 encoded so clients treat it as opaque

Example payload:
    2025-01-15T10:30:00+00:00_3f2a9c0e8d1b4e7fa5c6d2b1e0f9a8c7

The encoding hides structure from clients but is not a security boundary;
cursors are neither signed nor encrypted.
"""

from __future__ import annotations

import base64
import binascii
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from chat_service.core.database.exceptions import MalformedCursorError
from chat_service.core.database.filters import field_value

SEPARATOR = "_"

# Ordering field each entity type paginates on
MESSAGE_CURSOR_FIELD = "created_at"
CHAT_CURSOR_FIELD = "updated_at"


class CursorKey(BaseModel):
    """Decoded cursor: the (timestamp, id) sort key of a boundary record.

    Instances order like the records they point at, timestamp first,
    then id.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(description="Ordering field value of the boundary record")
    id: str = Field(min_length=1, description="Id of the boundary record")

    def as_tuple(self) -> tuple[datetime, str]:
        return (self.timestamp, self.id)


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        cursor = CursorCodec.encode(message.created_at, message.id)
        key = CursorCodec.decode(cursor)
        key.timestamp, key.id

        # Or straight from a record
        cursor = CursorCodec.for_record(chat, CHAT_CURSOR_FIELD)
    """

    @staticmethod
    def encode(timestamp: datetime, id: str) -> str:  # noqa: A002
        """Encode a (timestamp, id) pair to an opaque string.

        Args:
            timestamp: Ordering field value of the record
            id: Record id

        Returns:
            URL-safe base64 encoded string
        """
        raw = f"{timestamp.isoformat()}{SEPARATOR}{id}"
        return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")

    @staticmethod
    def decode(cursor: str) -> CursorKey:
        """Decode a cursor string to its (timestamp, id) pair.

        Args:
            cursor: URL-safe base64 encoded cursor string

        Returns:
            CursorKey with the boundary timestamp and id

        Raises:
            MalformedCursorError: not base64, not UTF-8 text, no separator,
                empty id, or an unparseable or timezone-naive timestamp
        """
        try:
            raw = base64.b64decode(cursor.encode("ascii"), altchars=b"-_", validate=True)
        except (binascii.Error, UnicodeEncodeError, ValueError) as e:
            raise MalformedCursorError(cursor, "not base64") from e

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedCursorError(cursor, "not valid text") from e

        timestamp_str, separator, record_id = text.partition(SEPARATOR)
        if not separator or not timestamp_str or not record_id:
            raise MalformedCursorError(cursor, "missing separator")

        try:
            timestamp = datetime.fromisoformat(timestamp_str)
        except ValueError as e:
            raise MalformedCursorError(cursor, "bad timestamp") from e
        # Stored timestamps are UTC-aware; a naive boundary cannot be compared
        if timestamp.tzinfo is None:
            raise MalformedCursorError(cursor, "bad timestamp")

        return CursorKey(timestamp=timestamp, id=record_id)

    @staticmethod
    def for_record(record: Any, field: str) -> str:
        """Create the cursor of a record keyed on ``field``.

        Example:
            cursor = CursorCodec.for_record(message, MESSAGE_CURSOR_FIELD)
        """
        return CursorCodec.encode(field_value(record, field), field_value(record, "id"))


def sort_key(record: Any, field: str) -> tuple[datetime, str]:
    """(ordering field, id) tuple used to sort and seek records."""
    return (field_value(record, field), field_value(record, "id"))


__all__ = [
    "CHAT_CURSOR_FIELD",
    "MESSAGE_CURSOR_FIELD",
    "SEPARATOR",
    "CursorCodec",
    "CursorKey",
    "sort_key",
]

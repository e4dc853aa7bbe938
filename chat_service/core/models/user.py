"""User record."""

from __future__ import annotations

from pydantic import Field

from chat_service.core.models.base import Record


class User(Record):
    """Chat participant.

    ``password`` holds an already-hashed value; hashing happens upstream.
    """

    username: str = Field(..., min_length=1, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    password: str = Field(..., description="Hashed password")
    is_active: bool = True

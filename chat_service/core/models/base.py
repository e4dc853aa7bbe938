"""Base record classes for stored entities."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Record(BaseModel):
    """Base model shared by every record held in the entity store.

    Records are frozen: the store replaces a record on update instead of
    mutating it, so a record handed to a caller never changes underneath it.

    Example:
        class Tag(Record):
            label: str

        tag = store.create("tags", Tag, {"label": "urgent"})
        tag.id          # assigned by the store
        tag.created_at  # store clock at insert time
    """

    model_config = ConfigDict(
        frozen=True,
        # Populate models by field name (not alias)
        populate_by_name=True,
        # Ignore extra fields (silently drop unexpected data)
        extra="ignore",
    )

    id: str = Field(..., description="Store-assigned identifier")
    created_at: datetime = Field(
        default_factory=utc_now,
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last update timestamp",
    )

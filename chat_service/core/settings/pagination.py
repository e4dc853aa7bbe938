"""Pagination settings for cursor-paginated queries.

Centralized pagination settings keep page sizes consistent across
chat lists and message histories.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=50, PAGINATION_MAX_LIMIT=100
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size when neither ``first`` nor ``last`` is given.
        max_limit: Maximum allowed ``first``/``last`` (hard limit).
        anchor_latest_page: Treat an un-cursored forward page as the latest
            page: ``has_next_page`` is False and ``has_previous_page``
            reports whether older records exist.

    Example:
        settings = PaginationSettings()
        limit = min(requested_limit, settings.max_limit)
    """

    default_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum allowed page size (hard limit)",
    )
    anchor_latest_page: bool = Field(
        default=True,
        description="Report older records as previous pages on an un-cursored forward page",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

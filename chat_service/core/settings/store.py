"""Entity store settings.

Environment variables use STORE_ prefix.
Example: STORE_SLOW_QUERY_THRESHOLD_MS=25
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """In-memory entity store configuration.

    Attributes:
        id_prefixes: Optional per-collection prefix prepended to generated ids
            (e.g. ``{"messages": "msg_"}``).
        slow_query_threshold_ms: ``find_all`` calls slower than this are
            logged at WARNING.
    """

    id_prefixes: dict[str, str] = Field(
        default_factory=dict,
        description="Per-collection id prefix",
    )
    slow_query_threshold_ms: float = Field(
        default=100.0,
        ge=0.0,
        description="Slow find_all threshold in milliseconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

"""Pydantic Settings v2 configuration.

Modular settings by domain (logging, pagination, store), each read from
environment variables with its own prefix and cached by a loader:

    from chat_service.core.settings import get_pagination_settings

    settings = get_pagination_settings()
    print(settings.default_limit)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .loader import (
    clear_settings_cache,
    get_logging_settings,
    get_pagination_settings,
    get_store_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings
from .store import StoreSettings

__all__ = [
    "LoggingSettings",
    "PaginationSettings",
    "StoreSettings",
    "clear_settings_cache",
    "get_logging_settings",
    "get_pagination_settings",
    "get_store_settings",
]

"""Logging infrastructure.

Structured logging for the data-access core:
- JSONL format for log aggregation
- Lazy evaluation for expensive debug messages
- dictConfig-based setup driven by LoggingSettings

Basic usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.info("Entity deleted", extra={"entity": "Chat", "id": chat_id})

    # Lazy evaluation for expensive operations
    from chat_service.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Window ids: {[r.id for r in window]}")
"""

from chat_service.infra.logging.config import (
    configure_logging,
    reset_logging_state,
    setup_logging,
)
from chat_service.infra.logging.formatters import JSONFormatter
from chat_service.infra.logging.lazy import (
    LazyLoggerAdapter,
    get_lazy_logger,
)

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "reset_logging_state",
    "setup_logging",
]

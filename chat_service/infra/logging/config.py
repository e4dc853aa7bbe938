"""Logging configuration setup.

Builds a ``logging.config.dictConfig`` configuration with a single console
handler on the root logger; library loggers (``repository.*``,
``chat_service.*``) propagate up to it.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

if TYPE_CHECKING:
    from chat_service.core.settings.logs import LoggingSettings


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from chat_service.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = settings_obj.to_logging_kwargs()
    if configure_kwargs:
        log_config = {**log_config, **configure_kwargs}

    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    console_enabled: bool = True,
    service_name: str | None = None,
    capture_warnings: bool = True,
) -> None:
    """Configure root logging with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Emit JSON Lines instead of plain text.
        console_enabled: Attach a stderr handler.
        service_name: Static ``service`` field added to JSON records.
        capture_warnings: Forward Python warnings to logging system.

    Example:
        from chat_service.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    if capture_warnings:
        logging.captureWarnings(True)

    formatters: dict[str, Any] = {
        "plain": {
            "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        },
        "json": {
            "()": "chat_service.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name} if service_name else None,
        },
    }

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": "json" if json_logs else "plain",
            "stream": "ext://sys.stderr",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": formatters,
            "handlers": handlers,
            "root": {"level": log_level, "handlers": list(handlers)},
        }
    )
    logger.debug(
        "Logging configured",
        extra={"level": log_level, "json_logs": json_logs, "handlers": list(handlers)},
    )


def reset_logging_state() -> None:
    """Allow ``setup_logging`` to run again (tests)."""
    global _LOGGING_INITIALIZED
    _LOGGING_INITIALIZED = False

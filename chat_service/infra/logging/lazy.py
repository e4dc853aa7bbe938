"""Lazy evaluation support for logging.

Debug lines in the store and repositories often describe whole result
sets. Passing a callable instead of a string defers that work until the
level is known to be enabled.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages only when enabled.

    Context bound at creation is merged into every record's ``extra``;
    keys passed per call win over bound ones.

    Example:
        ```python
        logger = get_lazy_logger("repository.Chat", entity="Chat")
        logger.debug(lambda: f"find_all -> {len(items)} items")
        logger.warning("Slow query", extra={"duration_ms": 840})
        ```
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()
        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get a logger with lazy evaluation support.

    Args:
        name: Logger name
        **context: Fields bound to every record from this logger
    """
    return LazyLoggerAdapter(logging.getLogger(name), context)

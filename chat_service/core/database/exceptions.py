"""Data-access exceptions.

Custom exceptions for store, query and pagination operations that carry
structured details alongside a readable message.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations.

    Raised when a repository operation fails due to programming
    errors, invalid query options, or unexpected states.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class NotFoundError(RepositoryError):
    """Record not found in the store.

    Only raised by the ``*_or_raise`` lookups. Plain ``update`` and
    ``delete`` report a missing id as ``None``/``False`` instead.

    Attributes:
        model_name: Name of the record type that wasn't found
        identifier: The key/value that was searched for
    """

    def __init__(self, model_name: str, identifier: dict[str, Any]):
        """Initialize not found error.

        Args:
            model_name: Name of the record type (e.g., "Chat", "Message")
            identifier: Key-value pairs used in the search (e.g., {"id": "abc"})
        """
        self.model_name = model_name
        self.identifier = identifier

        id_str = ", ".join(f"{k}={v!r}" for k, v in identifier.items())
        message = f"{model_name} not found with {id_str}"

        super().__init__(message, details={"model": model_name, **identifier})

    def __repr__(self) -> str:
        """Repr for debugging."""
        return f"NotFoundError(model={self.model_name!r}, identifier={self.identifier!r})"


class InvalidFilterError(RepositoryError):
    """Invalid filter or query parameters.

    Raised when query options are malformed, e.g. a negative limit.
    """

    def __init__(self, message: str, filter_name: str | None = None):
        """Initialize invalid filter error.

        Args:
            message: Error description
            filter_name: Name of the problematic filter (if applicable)
        """
        details = {"filter": filter_name} if filter_name else {}
        super().__init__(message, details=details)


class UnsupportedOperatorError(InvalidFilterError):
    """Conditional filter uses an operator outside ``FilterOperator``.

    Operators form a closed enumeration, so this signals a programming
    defect rather than a recoverable condition.
    """

    def __init__(self, operator: Any):
        self.operator = operator
        super().__init__(f"Unsupported filter operator: {operator!r}", filter_name=str(operator))


class PaginationError(RepositoryError):
    """Base exception for cursor pagination failures."""


class InvalidPaginationArgsError(PaginationError):
    """Mutually exclusive pagination arguments were supplied together.

    Raised for ``first`` with ``last``, ``after`` with ``before``, or a
    cursor that does not match the direction, before any store access happens.
    """

    def __init__(self, message: str, **arguments: Any):
        super().__init__(message, details=arguments)


class MalformedCursorError(PaginationError, ValueError):
    """Cursor string could not be decoded.

    Subclasses ``ValueError`` so callers that treat cursor problems as
    bad input values keep working.
    """

    def __init__(self, cursor: str, reason: str):
        self.cursor = cursor
        self.reason = reason
        super().__init__(f"Invalid cursor: {reason}", details={"cursor": cursor})


__all__ = [
    "InvalidFilterError",
    "InvalidPaginationArgsError",
    "MalformedCursorError",
    "NotFoundError",
    "PaginationError",
    "RepositoryError",
    "UnsupportedOperatorError",
]

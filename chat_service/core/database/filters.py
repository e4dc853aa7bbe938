"""Conditional filters evaluated against in-memory records.

A ``ConditionalFilter`` is a single typed predicate ``(key, operator, value)``.
``matches`` decides one predicate; ``matches_all`` ANDs a list of them.

Usage:
    from chat_service.core.database.filters import ConditionalFilter, FilterOperator, matches

    condition = ConditionalFilter(key="content", operator=FilterOperator.CONTAINS, value="hello")
    matches(message, condition)  # True for "Hello world"
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence, Set
from enum import StrEnum
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict

from chat_service.core.database.exceptions import UnsupportedOperatorError


class FilterOperator(StrEnum):
    """Closed set of conditional filter operators."""

    EQUALS = "eq"
    NOT_EQUALS = "ne"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"
    IN = "in"
    NOT_IN = "nin"
    LIKE = "like"
    NOT_LIKE = "nlike"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    IS_NULL = "isNull"
    IS_NOT_NULL = "isNotNull"


class ConditionalFilter(BaseModel):
    """Single predicate applied during a query.

    Attributes:
        key: Record field name
        operator: Comparison to apply
        value: Operand (a sequence for IN/NOT_IN, unused for null checks)
    """

    model_config = ConfigDict(frozen=True)

    key: str
    operator: FilterOperator
    value: Any = None


def field_value(record: Any, key: str) -> Any:
    """Read ``key`` from a record or mapping; absent fields read as None."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def matches(record: Any, condition: ConditionalFilter) -> bool:
    """Decide whether ``record`` satisfies ``condition``.

    Pure function of its inputs. Ordered comparisons against a missing
    field or an incomparable operand are false rather than errors.

    Raises:
        UnsupportedOperatorError: operator is not a ``FilterOperator``
    """
    value = field_value(record, condition.key)
    operand = condition.value

    match condition.operator:
        case FilterOperator.EQUALS:
            return _same(value, operand)
        case FilterOperator.NOT_EQUALS:
            return not _same(value, operand)
        case FilterOperator.GREATER_THAN:
            return _compare(value, operand, lambda a, b: a > b)
        case FilterOperator.GREATER_THAN_OR_EQUAL:
            return _compare(value, operand, lambda a, b: a >= b)
        case FilterOperator.LESS_THAN:
            return _compare(value, operand, lambda a, b: a < b)
        case FilterOperator.LESS_THAN_OR_EQUAL:
            return _compare(value, operand, lambda a, b: a <= b)
        case FilterOperator.IN:
            return _is_collection(operand) and _member(value, operand)
        case FilterOperator.NOT_IN:
            return _is_collection(operand) and not _member(value, operand)
        case FilterOperator.LIKE:
            return _like(value, operand)
        case FilterOperator.NOT_LIKE:
            return not _like(value, operand)
        case FilterOperator.CONTAINS:
            return _contains(value, operand)
        case FilterOperator.STARTS_WITH:
            return _both_str(value, operand) and value.lower().startswith(operand.lower())
        case FilterOperator.ENDS_WITH:
            return _both_str(value, operand) and value.lower().endswith(operand.lower())
        case FilterOperator.IS_NULL:
            return value is None
        case FilterOperator.IS_NOT_NULL:
            return value is not None
        case _:
            raise UnsupportedOperatorError(condition.operator)


def matches_all(record: Any, conditions: Sequence[ConditionalFilter]) -> bool:
    """True when ``record`` satisfies every condition (empty list matches)."""
    return all(matches(record, condition) for condition in conditions)


def matches_exact(record: Any, expected: Mapping[str, Any]) -> bool:
    """Legacy exact-match map: every key must equal its value."""
    return all(_same(field_value(record, key), value) for key, value in expected.items())


def _same(value: Any, operand: Any) -> bool:
    # bool is an int subclass: keep True apart from 1
    return isinstance(value, bool) is isinstance(operand, bool) and value == operand


def _member(value: Any, collection: Any) -> bool:
    return any(_same(value, item) for item in collection)


def _compare(value: Any, operand: Any, op: Any) -> bool:
    if value is None or operand is None:
        return False
    try:
        return bool(op(value, operand))
    except TypeError:
        return False


def _is_collection(operand: Any) -> bool:
    return isinstance(operand, (Sequence, Set)) and not isinstance(operand, (str, bytes))


def _both_str(value: Any, operand: Any) -> bool:
    return isinstance(value, str) and isinstance(operand, str)


def _contains(value: Any, operand: Any) -> bool:
    if _is_collection(value):
        return _member(operand, value)
    if _both_str(value, operand):
        return operand.lower() in value.lower()
    return False


def _like(value: Any, pattern: Any) -> bool:
    if not _both_str(value, pattern):
        return False
    return _like_regex(pattern).fullmatch(value) is not None


@lru_cache(maxsize=256)
def _like_regex(pattern: str) -> re.Pattern[str]:
    """Translate a SQL LIKE pattern (``%`` any run, ``_`` one char)."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


__all__ = [
    "ConditionalFilter",
    "FilterOperator",
    "field_value",
    "matches",
    "matches_all",
    "matches_exact",
]

"""Fluent query builder producing immutable ``FindOptions``.

Usage:
    from chat_service.core.database.query import QueryBuilder

    options = (
        QueryBuilder.create()
        .where_contains("member_ids", user_id)
        .where_equals("is_group", True)
        .order_by("updated_at", "desc")
        .limit(20)
        .build()
    )
    chats = await chat_repo.find_all(options)

A builder is single use: build one per query and do not share it between
concurrent callers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from chat_service.core.database.exceptions import InvalidFilterError, UnsupportedOperatorError
from chat_service.core.database.filters import ConditionalFilter, FilterOperator

OrderDirection = Literal["asc", "desc"]


class FindOptions(BaseModel):
    """Immutable query descriptor consumed by ``BaseRepository.find_all``.

    Attributes:
        filter: Legacy exact-match map (every key must equal its value)
        conditional_filters: Typed predicates, combined with AND
        order_by: Field to sort by; None keeps insertion order
        order_direction: "asc" (default) or "desc"
        limit: Maximum records to return
        offset: Records to skip before ``limit`` applies
    """

    model_config = ConfigDict(frozen=True)

    filter: dict[str, Any] | None = None
    conditional_filters: tuple[ConditionalFilter, ...] = ()
    order_by: str | None = None
    order_direction: OrderDirection = "asc"
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)

    @field_validator("order_direction", mode="before")
    @classmethod
    def normalize_direction(cls, v: Any) -> Any:
        """Accept "ASC"/"DESC" as well."""
        if isinstance(v, str):
            return v.lower()
        return v

    def merged(self, **changes: Any) -> FindOptions:
        """Copy with ``changes`` applied and re-validated."""
        return _validated({**self.model_dump(), **changes})


def _validated(values: Mapping[str, Any]) -> FindOptions:
    try:
        return FindOptions.model_validate(values)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise InvalidFilterError(f"Invalid find options: {e.error_count()} error(s)", fields or None) from e


class QueryBuilder:
    """Mutable accumulator of conditions, ordering and slicing."""

    def __init__(self) -> None:
        self._conditions: list[ConditionalFilter] = []
        self._filter: dict[str, Any] = {}
        self._order_by: str | None = None
        self._order_direction: OrderDirection = "asc"
        self._limit: int | None = None
        self._offset: int | None = None

    @classmethod
    def create(cls) -> QueryBuilder:
        return cls()

    def where(self, key: str, operator: FilterOperator | str, value: Any = None) -> Self:
        """Add a conditional filter."""
        try:
            op = FilterOperator(operator)
        except ValueError:
            raise UnsupportedOperatorError(operator) from None
        self._conditions.append(ConditionalFilter(key=key, operator=op, value=value))
        return self

    def where_equals(self, key: str, value: Any) -> Self:
        return self.where(key, FilterOperator.EQUALS, value)

    def where_not_equals(self, key: str, value: Any) -> Self:
        return self.where(key, FilterOperator.NOT_EQUALS, value)

    def where_greater_than(self, key: str, value: Any) -> Self:
        return self.where(key, FilterOperator.GREATER_THAN, value)

    def where_greater_than_or_equal(self, key: str, value: Any) -> Self:
        return self.where(key, FilterOperator.GREATER_THAN_OR_EQUAL, value)

    def where_less_than(self, key: str, value: Any) -> Self:
        return self.where(key, FilterOperator.LESS_THAN, value)

    def where_less_than_or_equal(self, key: str, value: Any) -> Self:
        return self.where(key, FilterOperator.LESS_THAN_OR_EQUAL, value)

    def where_in(self, key: str, values: Sequence[Any]) -> Self:
        return self.where(key, FilterOperator.IN, list(values))

    def where_not_in(self, key: str, values: Sequence[Any]) -> Self:
        return self.where(key, FilterOperator.NOT_IN, list(values))

    def where_like(self, key: str, pattern: str) -> Self:
        """Add a LIKE filter (SQL-style wildcards ``%`` and ``_``)."""
        return self.where(key, FilterOperator.LIKE, pattern)

    def where_not_like(self, key: str, pattern: str) -> Self:
        return self.where(key, FilterOperator.NOT_LIKE, pattern)

    def where_contains(self, key: str, value: Any) -> Self:
        """Add a contains filter (list membership or case-insensitive substring)."""
        return self.where(key, FilterOperator.CONTAINS, value)

    def where_starts_with(self, key: str, value: str) -> Self:
        return self.where(key, FilterOperator.STARTS_WITH, value)

    def where_ends_with(self, key: str, value: str) -> Self:
        return self.where(key, FilterOperator.ENDS_WITH, value)

    def where_null(self, key: str) -> Self:
        return self.where(key, FilterOperator.IS_NULL)

    def where_not_null(self, key: str) -> Self:
        return self.where(key, FilterOperator.IS_NOT_NULL)

    def order_by(self, field: str, direction: OrderDirection | str = "asc") -> Self:
        self._order_by = field
        self._order_direction = direction.lower()  # type: ignore[assignment]
        return self

    def limit(self, count: int) -> Self:
        self._limit = count
        return self

    def offset(self, count: int) -> Self:
        self._offset = count
        return self

    def filter(self, values: Mapping[str, Any]) -> Self:
        """Merge an exact-match map (kept for older call sites)."""
        self._filter.update(values)
        return self

    def build(self) -> FindOptions:
        """Snapshot the accumulated state as immutable ``FindOptions``."""
        return _validated(
            {
                "filter": dict(self._filter) or None,
                "conditional_filters": tuple(self._conditions),
                "order_by": self._order_by,
                "order_direction": self._order_direction,
                "limit": self._limit,
                "offset": self._offset,
            }
        )


__all__ = ["FindOptions", "OrderDirection", "QueryBuilder"]

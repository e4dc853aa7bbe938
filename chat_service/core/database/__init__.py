"""Core data-access package: entity store, query engine and repository.

Store:
    - EntityStore: Thread-safe in-memory owner of all collections
    - RecordStore: Protocol of the store operations repositories may call

Repository:
    - BaseRepository[T]: Generic CRUD plus filtered, sorted, sliced reads

Query Filters:
    - FilterOperator: Closed set of conditional operators (eq, like, in, ...)
    - ConditionalFilter: Single (key, operator, value) predicate
    - matches / matches_all: Evaluate predicates against a record

Query Builder:
    - QueryBuilder: Fluent, single-use accumulator of conditions
    - FindOptions: Immutable query descriptor

Exceptions:
    - RepositoryError: Base exception for data-access operations
    - NotFoundError: Record not found (only from ``*_or_raise``)
    - InvalidFilterError / UnsupportedOperatorError: Malformed queries
    - PaginationError and subclasses: Bad pagination input

Example:
    from chat_service.core.database import EntityStore, QueryBuilder
    from chat_service.core.repositories import MessageRepository

    store = EntityStore()
    messages = MessageRepository(store)
    options = QueryBuilder.create().where_contains("content", "hello").build()
    found = await messages.find_all(options)
"""

from chat_service.core.database.exceptions import (
    InvalidFilterError,
    InvalidPaginationArgsError,
    MalformedCursorError,
    NotFoundError,
    PaginationError,
    RepositoryError,
    UnsupportedOperatorError,
)
from chat_service.core.database.filters import (
    ConditionalFilter,
    FilterOperator,
    field_value,
    matches,
    matches_all,
    matches_exact,
)
from chat_service.core.database.query import FindOptions, OrderDirection, QueryBuilder
from chat_service.core.database.repository import BaseRepository
from chat_service.core.database.store import EntityStore, RecordStore

__all__ = [
    # Repository
    "BaseRepository",
    # Filters
    "ConditionalFilter",
    # Store
    "EntityStore",
    "FilterOperator",
    # Query builder
    "FindOptions",
    # Exceptions
    "InvalidFilterError",
    "InvalidPaginationArgsError",
    "MalformedCursorError",
    "NotFoundError",
    "OrderDirection",
    "PaginationError",
    "QueryBuilder",
    "RecordStore",
    "RepositoryError",
    "UnsupportedOperatorError",
    "field_value",
    "matches",
    "matches_all",
    "matches_exact",
]

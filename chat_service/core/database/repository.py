"""Generic repository over one collection of the entity store.

Provides CRUD plus filtered, sorted and sliced reads. Entity repositories
subclass it, set ``model`` and ``collection``, and add their own queries.

Example:
    from chat_service.core.database import BaseRepository, QueryBuilder
    from chat_service.core.models import USERS, User

    class UserRepository(BaseRepository[User]):
        '''User-specific queries beyond basic CRUD.'''

        model = User
        collection = USERS

        async def find_by_email(self, email: str) -> User | None:
            return await self.find_one(QueryBuilder.create().where_equals("email", email).build())

    # Usage
    users = UserRepository(store)
    user = await users.find_by_id(user_id)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from chat_service.core.database.exceptions import InvalidFilterError, NotFoundError
from chat_service.core.database.filters import field_value, matches_all, matches_exact
from chat_service.core.database.query import FindOptions
from chat_service.core.models.base import Record
from chat_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chat_service.core.database.store import RecordStore
    from chat_service.core.pagination import PaginatedResult, PaginationParams


class BaseRepository[T: Record]:
    """Generic repository for one record type.

    Provides:
        - create(data) -> T
        - find_by_id(id) -> T | None
        - find_by_id_or_raise(id) -> T (raises NotFoundError)
        - find_one(options) -> T | None
        - find_all(options) -> list[T]
        - count(filter) -> int
        - update(id, patch) -> T | None
        - delete(id) -> bool
        - exists(id) -> bool

    The store is passed in explicitly; the repository keeps no copy of
    the collection. Methods are coroutines for async callers even though
    no call ever suspends.
    """

    model: type[T]
    collection: str

    __slots__ = ("_store", "_logger", "_lazy", "_slow_query_ms")

    def __init__(self, store: RecordStore, *, slow_query_ms: float | None = None) -> None:
        """Initialize repository with the store it reads and writes.

        Args:
            store: Entity store (anything implementing ``RecordStore``)
            slow_query_ms: WARNING threshold for ``find_all``; defaults to
                ``StoreSettings.slow_query_threshold_ms``
        """
        if slow_query_ms is None:
            from chat_service.core.settings import get_store_settings

            slow_query_ms = get_store_settings().slow_query_threshold_ms

        self._store = store
        self._slow_query_ms = slow_query_ms
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{self.model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{self.model.__name__}", entity=self.model.__name__)

    def prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Hook for subclasses to fill in defaults before insertion."""
        return data

    async def create(self, data: Mapping[str, Any]) -> T:
        """Insert a record; the store assigns id and timestamps."""
        record = self._store.create(self.collection, self.model, self.prepare_create(dict(data)))
        self._lazy.debug(lambda: f"repo.create: {self.model.__name__}({record.id})")
        return record

    async def find_by_id(self, id: str) -> T | None:  # noqa: A002
        """Get a record by id.

        Returns:
            Record if found, None otherwise
        """
        record = self._store.get(self.collection, id)
        self._lazy.debug(
            lambda: f"repo.find_by_id: {self.model.__name__}({id}) -> {'found' if record else 'not found'}"
        )
        return record  # type: ignore[return-value]

    async def find_by_id_or_raise(self, id: str) -> T:  # noqa: A002
        """Get a record by id or raise NotFoundError.

        Raises:
            NotFoundError: If no record has this id
        """
        record = await self.find_by_id(id)
        if record is None:
            self._logger.info(
                "Record not found",
                extra={
                    "entity": self.model.__name__,
                    "id": id,
                    "operation": "repo.find_by_id_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return record

    async def find_one(self, options: FindOptions | None = None) -> T | None:
        """First record matching ``options`` (after ordering), or None."""
        options = options or FindOptions()
        records = await self.find_all(options.merged(limit=1))
        return records[0] if records else None

    async def find_all(self, options: FindOptions | None = None) -> list[T]:
        """Query the collection.

        Pipeline: snapshot -> exact-match filter -> conditional filters
        (AND) -> stable sort -> offset -> limit.

        Args:
            options: Query descriptor; None returns every record in
                insertion order

        Returns:
            Matching records

        Raises:
            InvalidFilterError: ``order_by`` values are not comparable
            UnsupportedOperatorError: a condition has an unknown operator
        """
        options = options or FindOptions()
        started = time.perf_counter()

        records = self._select(options)
        if options.order_by:
            records = self._sort(records, options.order_by, descending=options.order_direction == "desc")
        if options.offset:
            records = records[options.offset :]
        if options.limit is not None:
            records = records[: options.limit]

        elapsed_ms = (time.perf_counter() - started) * 1000
        if elapsed_ms > self._slow_query_ms:
            self._logger.warning(
                "Slow find_all",
                extra={
                    "entity": self.model.__name__,
                    "duration_ms": round(elapsed_ms, 2),
                    "results": len(records),
                    "operation": "repo.find_all",
                },
            )
        self._lazy.debug(
            lambda: f"repo.find_all: {self.model.__name__}"
            f"(conditions={len(options.conditional_filters)}, order_by={options.order_by}) -> {len(records)} items"
        )
        return records

    async def count(self, filter: FindOptions | Mapping[str, Any] | None = None) -> int:  # noqa: A002
        """Number of records matching the filters; ordering and slicing are ignored."""
        if filter is None:
            options = FindOptions()
        elif isinstance(filter, FindOptions):
            options = filter
        else:
            options = FindOptions(filter=dict(filter))
        return len(self._select(options))

    async def update(self, id: str, patch: Mapping[str, Any]) -> T | None:  # noqa: A002
        """Merge ``patch`` onto a record; None when the id is absent."""
        record = self._store.update(self.collection, id, patch)
        self._lazy.debug(
            lambda: f"repo.update: {self.model.__name__}({id}) -> {'updated' if record else 'not found'}"
        )
        return record  # type: ignore[return-value]

    async def delete(self, id: str) -> bool:  # noqa: A002
        """Delete a record; True if it existed."""
        removed = self._store.delete(self.collection, id)
        if removed:
            self._logger.info(
                "Record deleted",
                extra={"entity": self.model.__name__, "id": id, "operation": "repo.delete"},
            )
        return removed

    async def exists(self, id: str) -> bool:  # noqa: A002
        return self._store.get(self.collection, id) is not None

    def _select(self, options: FindOptions) -> list[T]:
        records: Iterable[Any] = self._store.snapshot(self.collection)
        if options.filter:
            records = [r for r in records if matches_exact(r, options.filter)]
        if options.conditional_filters:
            records = [r for r in records if matches_all(r, options.conditional_filters)]
        return list(records)

    @staticmethod
    def _sort(records: list[T], order_by: str, *, descending: bool) -> list[T]:
        # None sorts before any value when ascending
        def key(record: T) -> tuple[bool, Any]:
            value = field_value(record, order_by)
            return (value is not None, value)

        try:
            return sorted(records, key=key, reverse=descending)
        except TypeError as e:
            raise InvalidFilterError(f"Cannot order by {order_by!r}: values are not comparable", order_by) from e

    def _paginate(
        self,
        candidates: list[T],
        params: PaginationParams,
        field: str,
    ) -> PaginatedResult[T]:
        """Cursor-paginate an already filtered candidate set.

        ``total_count`` is the size of ``candidates``, taken before the
        cursor boundary trims anything.
        """
        from chat_service.core.pagination import paginate

        page = paginate(candidates, params, field, total_count=len(candidates))
        self._lazy.debug(
            lambda: f"repo.paginate: {self.model.__name__}({params.direction}, limit={params.limit}) "
            f"-> {len(page.edges)}/{page.total_count} items, has_next={page.page_info.has_next_page}"
        )
        return page.to_result()


__all__ = ["BaseRepository"]

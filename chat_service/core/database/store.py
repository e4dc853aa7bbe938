"""In-memory entity store.

The store owns every collection of records and is the single source of
truth for what exists. Repositories never hold a private copy of a
collection; they call the store through the ``RecordStore`` protocol.

Example:
    from chat_service.core.database import EntityStore
    from chat_service.core.models import MESSAGES, Message

    with EntityStore() as store:
        message = store.create(MESSAGES, Message, {"chat_id": "c1", ...})
        store.update(MESSAGES, message.id, {"content": "edited"})
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import TYPE_CHECKING, Any, Protocol

from chat_service.core.models.base import Record, utc_now
from chat_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from datetime import datetime

# Fields the store owns; patches never overwrite them
_PROTECTED_FIELDS = frozenset({"id", "created_at"})


class RecordStore(Protocol):
    """Store capabilities available to repositories."""

    def create[T: Record](self, collection: str, model: type[T], data: Mapping[str, Any]) -> T: ...

    def get(self, collection: str, id: str) -> Record | None: ...  # noqa: A002

    def update(self, collection: str, id: str, patch: Mapping[str, Any]) -> Record | None: ...  # noqa: A002

    def delete(self, collection: str, id: str) -> bool: ...  # noqa: A002

    def snapshot(self, collection: str) -> list[Record]: ...

    def now(self) -> datetime: ...


class EntityStore:
    """Thread-safe in-memory owner of all record collections.

    Collections are created lazily on first use and keep insertion order.
    A single lock guards id assignment, mutation and snapshots, so two
    concurrent ``create`` calls never receive the same id and every
    ``snapshot`` sees a consistent collection.

    Args:
        clock: Callable returning the current time; defaults to UTC now.
        id_prefixes: Optional per-collection prefix for generated ids.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] | None = None,
        id_prefixes: Mapping[str, str] | None = None,
    ) -> None:
        self._collections: dict[str, dict[str, Record]] = {}
        self._lock = threading.RLock()
        self._clock = clock or utc_now
        self._id_prefixes = dict(id_prefixes or {})
        self._started = time.monotonic()
        self._closed = False
        self._logger = logging.getLogger("chat_service.store")
        self._lazy = get_lazy_logger("chat_service.store")

    @classmethod
    def from_settings(cls, *, clock: Callable[[], datetime] | None = None) -> EntityStore:
        """Build a store configured from ``StoreSettings``."""
        from chat_service.core.settings import get_store_settings

        settings = get_store_settings()
        return cls(clock=clock, id_prefixes=settings.id_prefixes)

    def __enter__(self) -> EntityStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def now(self) -> datetime:
        """Current time according to the store clock."""
        return self._clock()

    def create[T: Record](self, collection: str, model: type[T], data: Mapping[str, Any]) -> T:
        """Insert a new record with a fresh id and timestamps.

        Args:
            collection: Collection name
            model: Record class used to validate ``data``
            data: Field values; ``id``/``created_at``/``updated_at`` are ignored

        Returns:
            The stored record
        """
        payload = {k: v for k, v in data.items() if k not in ("id", "created_at", "updated_at")}
        with self._lock:
            records = self._collection(collection)
            record_id = self._generate_id(collection, records)
            now = self._clock()
            record = model.model_validate(
                {**payload, "id": record_id, "created_at": now, "updated_at": now}
            )
            records[record_id] = record

        self._lazy.debug(lambda: f"store.create: {collection}({record_id})")
        return record

    def get(self, collection: str, id: str) -> Record | None:  # noqa: A002
        """Get a record by id, or None when absent."""
        with self._lock:
            return self._collections.get(collection, {}).get(id)

    def update(self, collection: str, id: str, patch: Mapping[str, Any]) -> Record | None:  # noqa: A002
        """Merge ``patch`` onto an existing record.

        ``updated_at`` is refreshed from the store clock unless the patch
        sets it explicitly. A missing id is a normal outcome and returns
        None rather than raising.

        Returns:
            The replacement record, or None if ``id`` is not stored
        """
        changes = {k: v for k, v in patch.items() if k not in _PROTECTED_FIELDS}
        with self._lock:
            records = self._collections.get(collection)
            existing = records.get(id) if records is not None else None
            if existing is None:
                self._lazy.debug(lambda: f"store.update: {collection}({id}) -> not found")
                return None

            if "updated_at" not in changes:
                changes["updated_at"] = self._clock()
            # Re-validate so patched values get the same coercion as create()
            updated = type(existing).model_validate({**existing.model_dump(), **changes})
            records[id] = updated

        self._lazy.debug(lambda: f"store.update: {collection}({id}) fields={sorted(changes)}")
        return updated

    def delete(self, collection: str, id: str) -> bool:  # noqa: A002
        """Remove a record; True if something was removed."""
        with self._lock:
            records = self._collections.get(collection)
            removed = records is not None and records.pop(id, None) is not None

        self._lazy.debug(
            lambda: f"store.delete: {collection}({id}) -> {'removed' if removed else 'not found'}"
        )
        return removed

    def clear(self, collection: str) -> None:
        """Empty one collection (seeding helper)."""
        with self._lock:
            count = len(self._collections.get(collection, {}))
            self._collections[collection] = {}

        self._logger.info(
            "Collection cleared",
            extra={"collection": collection, "removed": count, "operation": "store.clear"},
        )

    def snapshot(self, collection: str) -> list[Record]:
        """All records of a collection in insertion order."""
        with self._lock:
            return list(self._collections.get(collection, {}).values())

    def stats(self) -> dict[str, Any]:
        """Per-collection record counts and the overall total."""
        with self._lock:
            collections = {name: len(records) for name, records in self._collections.items()}
        return {"collections": collections, "total_records": sum(collections.values())}

    def health(self) -> dict[str, Any]:
        """Health summary: open flag, collection count, records, uptime."""
        stats = self.stats()
        return {
            "is_healthy": not self._closed,
            "timestamp": self._clock(),
            "details": {
                "collections": len(stats["collections"]),
                "total_records": stats["total_records"],
                "uptime_seconds": int(time.monotonic() - self._started),
            },
        }

    def close(self) -> None:
        """Dispose of the store, dropping every collection."""
        with self._lock:
            self._collections.clear()
            self._closed = True
        self._logger.info("Entity store closed", extra={"operation": "store.close"})

    def _collection(self, name: str) -> dict[str, Record]:
        return self._collections.setdefault(name, {})

    def _generate_id(self, collection: str, records: dict[str, Record]) -> str:
        # Caller holds the lock; the loop keeps ids unique even on a uuid clash
        prefix = self._id_prefixes.get(collection, "")
        while True:
            candidate = f"{prefix}{uuid.uuid4().hex}"
            if candidate not in records:
                return candidate


__all__ = ["EntityStore", "RecordStore"]

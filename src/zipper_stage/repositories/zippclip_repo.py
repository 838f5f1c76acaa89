"""Data access helpers for working with zippclips."""
from __future__ import annotations

from typing import Any, Protocol

from zipper_stage.store.base import Record, RecordStore
from zipper_stage.store.realtime import Handler, Subscription

__all__ = ["PARENT_FIELD", "ZIPPCLIPS", "WritableRecordStore", "ZippclipRepository"]

ZIPPCLIPS = "zippclips"
PARENT_FIELD = "parent_zippclip_id"


class WritableRecordStore(RecordStore, Protocol):
    """Record store that also accepts inserts and deletes."""

    async def insert(self, collection: str, values: Record) -> Record: ...

    async def delete(self, collection: str, record_id: str) -> Record | None: ...


class ZippclipRepository:
    """Thin wrapper around record-store access for zippclips."""

    def __init__(self, store: RecordStore) -> None:
        """Initialize the repository with the backing record store."""
        self.store = store

    async def get_by_id(self, zippclip_id: str) -> Record | None:
        """Return a zippclip by identifier."""
        return await self.store.fetch_by_id(ZIPPCLIPS, zippclip_id)

    async def count_children(self, parent_id: str) -> int:
        """Return how many zippclips ride ``parent_id``."""
        return await self.store.count_where(ZIPPCLIPS, {PARENT_FIELD: parent_id})

    async def list_children(
        self,
        parent_id: str,
        limit: int,
        before: Any | None = None,
    ) -> list[Record]:
        """Return children of ``parent_id`` sorted newest first."""
        return await self.store.fetch_where(
            ZIPPCLIPS,
            {PARENT_FIELD: parent_id},
            order_by="created_at",
            descending=True,
            limit=limit,
            before=before,
        )

    async def subscribe_children(
        self,
        parent_id: str,
        on_insert: Handler,
        on_delete: Handler,
    ) -> Subscription:
        """Watch inserts and deletes of children of ``parent_id``."""
        return await self.store.subscribe(
            ZIPPCLIPS,
            {PARENT_FIELD: parent_id},
            on_insert=on_insert,
            on_delete=on_delete,
        )

    async def create(self, values: Record) -> Record:
        """Insert a new zippclip and return the stored record."""
        return await self._writable().insert(ZIPPCLIPS, values)

    async def delete(self, zippclip_id: str) -> Record | None:
        """Delete a zippclip; children keep their parent reference."""
        return await self._writable().delete(ZIPPCLIPS, zippclip_id)

    def _writable(self) -> WritableRecordStore:
        if not hasattr(self.store, "insert") or not hasattr(self.store, "delete"):
            raise TypeError(f"{type(self.store).__name__} does not support writes")
        return self.store  # type: ignore[return-value]

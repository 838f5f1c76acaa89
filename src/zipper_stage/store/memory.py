"""Dictionary-backed record store with change notifications."""

from __future__ import annotations

import copy
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

from zipper_stage.core.errors import StoreUnavailableError

from .base import EMBEDDED_RELATIONS, Filters, Record, matches_filters
from .realtime import ChangeEvent, ChangeFeed, Handler, Subscription


class InMemoryRecordStore:
    """Record store kept entirely in process memory.

    Setting ``online`` to False makes every operation raise
    ``StoreUnavailableError``, which is how an unreachable backend looks to
    the services.
    """

    def __init__(self, feed: ChangeFeed | None = None) -> None:
        self._collections: defaultdict[str, dict[str, Record]] = defaultdict(dict)
        self.feed = feed or ChangeFeed()
        self.online = True

    def _ensure_online(self) -> None:
        if not self.online:
            raise StoreUnavailableError("In-memory store is offline")

    def _hydrate(self, collection: str, record: Record) -> Record:
        hydrated = copy.deepcopy(record)
        relation = EMBEDDED_RELATIONS.get(collection)
        if relation is not None:
            foreign_key, related = relation
            target = self._collections[related].get(record.get(foreign_key) or "")
            hydrated[related] = copy.deepcopy(target) if target is not None else None
        return hydrated

    async def fetch_by_id(self, collection: str, record_id: str) -> Record | None:
        self._ensure_online()
        record = self._collections[collection].get(record_id)
        if record is None:
            return None
        return self._hydrate(collection, record)

    async def fetch_where(
        self,
        collection: str,
        filters: Filters,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        before: Any | None = None,
    ) -> list[Record]:
        self._ensure_online()
        rows = [r for r in self._collections[collection].values() if matches_filters(r, filters)]
        if order_by is not None:
            if before is not None:
                rows = [r for r in rows if r.get(order_by) is not None and r[order_by] < before]
            rows = sorted(
                (r for r in rows if r.get(order_by) is not None),
                key=lambda r: r[order_by],
                reverse=descending,
            ) + [r for r in rows if r.get(order_by) is None]
        if limit is not None:
            rows = rows[:limit]
        return [self._hydrate(collection, r) for r in rows]

    async def count_where(self, collection: str, filters: Filters) -> int:
        self._ensure_online()
        return sum(1 for r in self._collections[collection].values() if matches_filters(r, filters))

    async def subscribe(
        self,
        collection: str,
        filters: Filters,
        on_insert: Handler | None = None,
        on_delete: Handler | None = None,
    ) -> Subscription:
        self._ensure_online()
        return await self.feed.subscribe(collection, filters, on_insert, on_delete)

    async def insert(self, collection: str, values: Record) -> Record:
        """Store a new record and notify subscribers.

        ``id`` and ``created_at`` are filled in when the caller omits them.
        """
        self._ensure_online()
        record = dict(values)
        record.setdefault("id", str(uuid.uuid4()))
        if record.get("created_at") is None:
            record["created_at"] = datetime.now(timezone.utc)
        self._collections[collection][record["id"]] = record
        await self.feed.publish(collection, ChangeEvent.INSERT, record)
        return self._hydrate(collection, record)

    async def delete(self, collection: str, record_id: str) -> Record | None:
        """Remove a record and notify subscribers; returns the removed record."""
        self._ensure_online()
        record = self._collections[collection].pop(record_id, None)
        if record is None:
            return None
        await self.feed.publish(collection, ChangeEvent.DELETE, record)
        return record

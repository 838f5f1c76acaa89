"""In-process change notifications for record stores.

Subscribers register equality filters on a collection and receive the
affected record on insert and delete. Delivery is a wake-up signal: callers
are expected to re-query rather than patch state from the payload.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .base import Filters, Record, matches_filters

logger = logging.getLogger(__name__)

Handler = Callable[[Record], Awaitable[None] | None]


class ChangeEvent(str, Enum):
    """Kinds of change a subscription can observe."""

    INSERT = "INSERT"
    DELETE = "DELETE"


@dataclass(eq=False)
class Subscription:
    """Handle returned by ``ChangeFeed.subscribe``."""

    collection: str
    filters: dict[str, Any]
    on_insert: Handler | None = None
    on_delete: Handler | None = None
    _feed: ChangeFeed | None = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self._feed is not None

    def matches(self, collection: str, record: Record) -> bool:
        return collection == self.collection and matches_filters(record, self.filters)

    def handler_for(self, event: ChangeEvent) -> Handler | None:
        return self.on_insert if event is ChangeEvent.INSERT else self.on_delete

    async def unsubscribe(self) -> None:
        """Detach from the feed; calling it twice is a no-op."""
        feed, self._feed = self._feed, None
        if feed is not None:
            await feed.remove(self)


class ChangeFeed:
    """Tracks subscriptions and fans change events out to matching ones."""

    def __init__(self) -> None:
        self._subscriptions: set[Subscription] = set()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._subscriptions)

    async def subscribe(
        self,
        collection: str,
        filters: Filters,
        on_insert: Handler | None = None,
        on_delete: Handler | None = None,
    ) -> Subscription:
        subscription = Subscription(
            collection=collection,
            filters=dict(filters),
            on_insert=on_insert,
            on_delete=on_delete,
            _feed=self,
        )
        async with self._lock:
            self._subscriptions.add(subscription)
        return subscription

    async def remove(self, subscription: Subscription) -> None:
        async with self._lock:
            self._subscriptions.discard(subscription)

    async def publish(self, collection: str, event: ChangeEvent, record: Record) -> int:
        """Deliver ``record`` to every matching subscription.

        Returns:
            Number of handlers invoked.
        """
        async with self._lock:
            targets = [sub for sub in self._subscriptions if sub.matches(collection, record)]

        delivered = 0
        for subscription in targets:
            handler = subscription.handler_for(event)
            if handler is None or not subscription.active:
                continue
            try:
                result = handler(dict(record))
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.error(
                    "Change handler failed for %s %s on %s",
                    event.value,
                    record.get("id"),
                    collection,
                    exc_info=True,
                )
            delivered += 1
        return delivered

"""Counting and listing the zippclips that ride a given zippclip."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from zipper_stage.core.errors import StoreUnavailableError
from zipper_stage.repositories.zippclip_repo import ZippclipRepository
from zipper_stage.schemas.zippclip import ChildrenSnapshot, ZippclipView
from zipper_stage.store.base import Record, RecordStore

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[ChildrenSnapshot], Awaitable[None] | None]
Unsubscribe = Callable[[], Awaitable[None]]


async def _noop_unsubscribe() -> None:
    return None


def _check_limit(limit: int) -> int:
    if limit < 1:
        raise ValueError("limit must be at least 1")
    return limit


class ChildAggregator:
    """Reports direct children of a zippclip.

    All reads are best effort: an unreachable store yields a zero count or
    an empty list.
    """

    def __init__(self, store: RecordStore, *, latest_limit: int = 1, list_limit: int = 20) -> None:
        self._repo = ZippclipRepository(store)
        self.latest_limit = _check_limit(latest_limit)
        self.list_limit = _check_limit(list_limit)

    async def count_children(self, post_id: str) -> int:
        try:
            return await self._repo.count_children(post_id)
        except StoreUnavailableError as exc:
            logger.warning("Child count for %s unavailable: %s", post_id, exc)
            return 0

    async def latest_children(self, post_id: str, limit: int | None = None) -> list[ZippclipView]:
        """Return the newest children, by default only the most recent one."""
        return await self.list_children(post_id, self.latest_limit if limit is None else limit)

    async def list_children(
        self,
        post_id: str,
        limit: int | None = None,
        before: datetime | None = None,
    ) -> list[ZippclipView]:
        """Return one page of children, newest first.

        Args:
            post_id: Parent zippclip id.
            limit: Page size, defaults to ``list_limit``.
            before: Only return children created strictly before this time.
        """
        page_size = _check_limit(self.list_limit if limit is None else limit)
        try:
            records = await self._repo.list_children(post_id, page_size, before=before)
        except StoreUnavailableError as exc:
            logger.warning("Child listing for %s unavailable: %s", post_id, exc)
            return []
        return [ZippclipView.from_record(record) for record in records]

    async def snapshot(self, post_id: str) -> ChildrenSnapshot:
        count, latest = await asyncio.gather(
            self.count_children(post_id),
            self.latest_children(post_id),
        )
        return ChildrenSnapshot(post_id=post_id, count=count, latest=latest)

    async def on_children_changed(self, post_id: str, callback: SnapshotCallback) -> Unsubscribe:
        """Re-query and call ``callback`` whenever a child is added or removed.

        The event only triggers a refetch; its payload is ignored.

        Returns:
            Coroutine function that cancels the subscription.
        """

        async def _refresh(_record: Record) -> None:
            snapshot = await self.snapshot(post_id)
            result = callback(snapshot)
            if inspect.isawaitable(result):
                await result

        try:
            subscription = await self._repo.subscribe_children(post_id, _refresh, _refresh)
        except StoreUnavailableError as exc:
            logger.warning("Cannot watch children of %s: %s", post_id, exc)
            return _noop_unsubscribe
        return subscription.unsubscribe

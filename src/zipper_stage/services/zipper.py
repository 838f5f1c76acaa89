"""Entry point bundling chain traversal and child aggregation."""

from __future__ import annotations

from datetime import datetime

from zipper_stage.core.settings import Settings, settings
from zipper_stage.schemas.zippclip import ChainLink, ChildrenSnapshot, ZippclipView
from zipper_stage.services.chain import ChainWalk, ChainWalker, OriginResolver
from zipper_stage.services.children import ChildAggregator, SnapshotCallback, Unsubscribe
from zipper_stage.store.base import RecordStore


class ZipperService:
    """Zipper chain queries over one injected record store."""

    def __init__(self, store: RecordStore, config: Settings | None = None) -> None:
        config = config or settings
        self.store = store
        self.parent_preview_levels = config.parent_preview_levels
        self.walker = ChainWalker(store, max_depth=config.chain_max_depth)
        self.origins = OriginResolver(store, max_depth=config.chain_max_depth)
        self.children = ChildAggregator(
            store,
            latest_limit=config.latest_limit,
            list_limit=config.list_limit,
        )

    async def get_ancestry_chain(self, start_id: str) -> list[ChainLink]:
        return await self.walker.ancestry(start_id)

    async def walk_chain(self, start_id: str) -> ChainWalk:
        return await self.walker.walk(start_id)

    async def get_parent_chain(self, start_id: str, levels: int | None = None) -> list[ChainLink]:
        return await self.walker.parents(start_id, self.parent_preview_levels if levels is None else levels)

    async def get_origin_post(self, start_id: str) -> ZippclipView | None:
        return await self.origins.resolve(start_id)

    async def get_child_count(self, post_id: str) -> int:
        return await self.children.count_children(post_id)

    async def get_latest_children(self, post_id: str, limit: int | None = None) -> list[ZippclipView]:
        return await self.children.latest_children(post_id, limit)

    async def get_children(
        self,
        post_id: str,
        limit: int | None = None,
        before: datetime | None = None,
    ) -> list[ZippclipView]:
        return await self.children.list_children(post_id, limit, before=before)

    async def get_children_snapshot(self, post_id: str) -> ChildrenSnapshot:
        return await self.children.snapshot(post_id)

    async def on_children_changed(self, post_id: str, callback: SnapshotCallback) -> Unsubscribe:
        return await self.children.on_children_changed(post_id, callback)

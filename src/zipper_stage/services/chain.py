"""Upward traversal of zipper chains.

A zippclip may ride another through ``parent_zippclip_id``, forming a chain
that ends at an origin (a zippclip with no parent). Nothing prevents a
malformed write from creating a cycle, so every walk is bounded by a fixed
maximum number of fetches. Store failures and missing ancestors end a walk
early instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from zipper_stage.core.errors import StoreUnavailableError
from zipper_stage.repositories.zippclip_repo import PARENT_FIELD, ZippclipRepository
from zipper_stage.schemas.zippclip import ChainEnd, ChainLink, ZippclipView
from zipper_stage.store.base import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10


@dataclass(frozen=True)
class ChainWalk:
    """Result of a chain walk.

    ``links`` runs from the furthest ancestor reached down to the starting
    zippclip. ``end`` records why the walk stopped.
    """

    links: list[ChainLink] = field(default_factory=list)
    end: ChainEnd = ChainEnd.BROKEN

    @property
    def reached_root(self) -> bool:
        return self.end is ChainEnd.ROOT

    @property
    def origin(self) -> ChainLink | None:
        """Return the origin zippclip when the walk actually reached it."""
        if self.reached_root and self.links:
            return self.links[0]
        return None


class ChainWalker:
    """Follows parent references from a zippclip up to its origin."""

    def __init__(self, store: RecordStore, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self._repo = ZippclipRepository(store)
        self.max_depth = max_depth

    async def walk(self, start_id: str, max_depth: int | None = None) -> ChainWalk:
        """Walk from ``start_id`` towards the origin.

        Args:
            start_id: Zippclip to start from (depth 0).
            max_depth: Optional tighter bound on the number of fetches.

        Returns:
            The visited links in origin-to-start order and the reason the walk ended.
        """
        bound = self.max_depth if max_depth is None else min(max_depth, self.max_depth)
        visited: list[ChainLink] = []
        if not start_id:
            return ChainWalk(visited, ChainEnd.BROKEN)

        current_id = start_id
        end = ChainEnd.TRUNCATED
        try:
            for depth in range(bound):
                record = await self._repo.get_by_id(current_id)
                if record is None:
                    logger.debug("Chain from %s broken at missing %s", start_id, current_id)
                    end = ChainEnd.BROKEN
                    break

                link = ChainLink.model_validate({**record, "depth": depth})
                visited.append(link)
                if not link.parent_zippclip_id:
                    end = ChainEnd.ROOT
                    break
                current_id = link.parent_zippclip_id
            else:
                logger.debug("Chain from %s truncated after %d steps", start_id, bound)
        except StoreUnavailableError as exc:
            logger.warning("Chain walk from %s stopped, store unavailable: %s", start_id, exc)
            end = ChainEnd.UNAVAILABLE

        visited.reverse()
        return ChainWalk(visited, end)

    async def ancestry(self, start_id: str) -> list[ChainLink]:
        """Return the chain from the furthest ancestor found down to ``start_id``."""
        walk = await self.walk(start_id)
        return walk.links

    async def parents(self, start_id: str, levels: int) -> list[ChainLink]:
        """Return up to ``levels`` ancestors of ``start_id``, oldest first.

        The starting zippclip itself is not included. When the store is
        unavailable the preview is empty.
        """
        if levels < 1:
            raise ValueError("levels must be at least 1")
        walk = await self.walk(start_id, max_depth=levels + 1)
        if walk.end is ChainEnd.UNAVAILABLE:
            return []
        return [link for link in walk.links if link.depth > 0]


class OriginResolver:
    """Finds the origin zippclip of the chain containing a given zippclip."""

    def __init__(self, store: RecordStore, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self._repo = ZippclipRepository(store)
        self.max_depth = max_depth

    async def resolve(self, start_id: str) -> ZippclipView | None:
        """Return the origin, or None when it could not be reached.

        None covers a missing ancestor, an exhausted depth bound and an
        unreachable store alike.
        """
        current_id = start_id
        try:
            for _ in range(self.max_depth):
                if not current_id:
                    return None
                record = await self._repo.get_by_id(current_id)
                if record is None:
                    return None
                parent_id = record.get(PARENT_FIELD)
                if not parent_id:
                    return ZippclipView.from_record(record)
                current_id = parent_id
        except StoreUnavailableError as exc:
            logger.warning("Origin lookup for %s failed, store unavailable: %s", start_id, exc)
            return None

        logger.debug("Origin lookup for %s gave up after %d steps", start_id, self.max_depth)
        return None

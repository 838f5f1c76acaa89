"""Service-level helpers for publishing and removing zippclips."""
from __future__ import annotations

import logging

from zipper_stage.core.errors import ParentNotFoundError, ZippclipNotFoundError
from zipper_stage.repositories.zippclip_repo import ZippclipRepository
from zipper_stage.schemas.zippclip import ZippclipCreate, ZippclipView

logger = logging.getLogger(__name__)


async def publish_zippclip(*, repo: ZippclipRepository, payload: ZippclipCreate) -> ZippclipView:
    """Create a zippclip, optionally riding an existing one.

    Args:
        repo: Repository used to persist the zippclip.
        payload: Validated create request.

    Returns:
        The stored zippclip as a display view.

    Raises:
        ParentNotFoundError: If ``parent_zippclip_id`` does not resolve.
        StoreUnavailableError: If the store cannot be reached.

    Notes:
        The parent reference is captured here once; nothing reassigns it later.
    """
    if payload.parent_zippclip_id:
        parent = await repo.get_by_id(payload.parent_zippclip_id)
        if parent is None:
            raise ParentNotFoundError(payload.parent_zippclip_id)

    record = await repo.create(payload.model_dump())
    logger.info(
        "Published zippclip %s (parent=%s)",
        record["id"],
        payload.parent_zippclip_id,
    )
    return ZippclipView.from_record(record)


async def delete_zippclip(*, repo: ZippclipRepository, zippclip_id: str) -> ZippclipView:
    """Delete a zippclip without touching its children.

    Children keep pointing at the removed id; chain walks stop there.

    Raises:
        ZippclipNotFoundError: If no zippclip has ``zippclip_id``.
    """
    record = await repo.delete(zippclip_id)
    if record is None:
        raise ZippclipNotFoundError(zippclip_id)
    logger.info("Deleted zippclip %s", zippclip_id)
    return ZippclipView.from_record(record)

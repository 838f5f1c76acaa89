"""Zipper chain endpoints for the Zipper Stage API."""

import asyncio
import logging
from contextlib import suppress
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query, Response, WebSocket, WebSocketDisconnect, status

from zipper_stage.api.v1.dependencies import RepositoryDep, ZipperServiceDep
from zipper_stage.core.errors import ParentNotFoundError, StoreUnavailableError, ZippclipNotFoundError
from zipper_stage.core.settings import settings
from zipper_stage.schemas.zippclip import (
    ChainLink,
    ChainStatusResponse,
    ChildrenSnapshot,
    ZippclipCreate,
    ZippclipView,
    ZipperCount,
)
from zipper_stage.services.publishing import delete_zippclip, publish_zippclip

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/zippclips", tags=["zippclips"])


@router.get("/{zippclip_id}/chain", response_model=list[ChainLink])
async def get_chain(zippclip_id: str, service: ZipperServiceDep) -> list[ChainLink]:
    """Return the zipper chain from its origin down to ``zippclip_id``.

    Args:
        zippclip_id: Zippclip to start from
        service: Zipper service

    Returns:
        Chain links ordered oldest first, each with its distance from the start
    """
    return await service.get_ancestry_chain(zippclip_id)


@router.get("/{zippclip_id}/chain/status", response_model=ChainStatusResponse)
async def get_chain_status(zippclip_id: str, service: ZipperServiceDep) -> ChainStatusResponse:
    """Return the zipper chain together with the reason the walk ended."""
    walk = await service.walk_chain(zippclip_id)
    return ChainStatusResponse(status=walk.end, links=walk.links)


@router.get("/{zippclip_id}/parents", response_model=list[ChainLink])
async def get_parents(
    zippclip_id: str,
    service: ZipperServiceDep,
    levels: int | None = Query(None, ge=1, le=settings.chain_max_depth),
) -> list[ChainLink]:
    """Return the zippclips this one rides on, oldest first, excluding itself."""
    return await service.get_parent_chain(zippclip_id, levels)


@router.get("/{zippclip_id}/origin", response_model=ZippclipView)
async def get_origin(zippclip_id: str, service: ZipperServiceDep) -> ZippclipView:
    """Return the original zippclip of the chain.

    Raises:
        HTTPException: If the origin could not be reached
    """
    origin = await service.get_origin_post(zippclip_id)
    if origin is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Could not find original video",
        )
    return origin


@router.get("/{zippclip_id}/zippers/count", response_model=ZipperCount)
async def get_zipper_count(zippclip_id: str, service: ZipperServiceDep) -> ZipperCount:
    """Return how many zippclips ride this one."""
    return ZipperCount(zippers=await service.get_child_count(zippclip_id))


@router.get("/{zippclip_id}/zippers", response_model=list[ZippclipView])
async def list_zippers(
    zippclip_id: str,
    service: ZipperServiceDep,
    limit: int = Query(settings.list_limit, ge=1, le=settings.list_max_limit),
    before: datetime | None = Query(None, description="Return zippers created before this time"),
) -> list[ZippclipView]:
    """List zippclips riding this one, newest first.

    Args:
        zippclip_id: Parent zippclip
        service: Zipper service
        limit: Maximum number of zippers to return
        before: Keyset cursor, the ``created_at`` of the last zipper already shown
    """
    return await service.get_children(zippclip_id, limit, before=before)


@router.get("/{zippclip_id}/zippers/latest", response_model=list[ZippclipView])
async def latest_zippers(
    zippclip_id: str,
    service: ZipperServiceDep,
    limit: int = Query(settings.latest_limit, ge=1, le=settings.list_max_limit),
) -> list[ZippclipView]:
    """Return the most recent zippers, used for the preview badge."""
    return await service.get_latest_children(zippclip_id, limit)


@router.post("/", response_model=ZippclipView, status_code=status.HTTP_201_CREATED)
async def create_zippclip(payload: ZippclipCreate, repo: RepositoryDep) -> ZippclipView:
    """Publish a zippclip, optionally riding an existing one.

    Raises:
        HTTPException: If the parent does not exist or the store is unavailable
    """
    try:
        return await publish_zippclip(repo=repo, payload=payload)
    except ParentNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Parent zippclip not found",
        ) from err
    except StoreUnavailableError as err:
        logger.warning("Publishing failed: %s", err)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Store unavailable",
        ) from err


@router.delete("/{zippclip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_zippclip(zippclip_id: str, repo: RepositoryDep) -> Response:
    """Delete a zippclip; zippclips riding it are left untouched."""
    try:
        await delete_zippclip(repo=repo, zippclip_id=zippclip_id)
    except ZippclipNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Zippclip not found",
        ) from err
    except StoreUnavailableError as err:
        logger.warning("Deleting %s failed: %s", zippclip_id, err)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Store unavailable",
        ) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _forward_snapshots(websocket: WebSocket, queue: "asyncio.Queue[ChildrenSnapshot]") -> None:
    while True:
        snapshot = await queue.get()
        await websocket.send_json(snapshot.model_dump(mode="json"))


@router.websocket("/{zippclip_id}/zippers/live")
async def watch_zippers(websocket: WebSocket, zippclip_id: str, service: ZipperServiceDep) -> None:
    """Push a fresh child snapshot on connect and after every child change."""
    await websocket.accept()
    queue: asyncio.Queue[ChildrenSnapshot] = asyncio.Queue()
    unsubscribe = await service.on_children_changed(zippclip_id, queue.put_nowait)
    await queue.put(await service.get_children_snapshot(zippclip_id))
    sender = asyncio.create_task(_forward_snapshots(websocket, queue))
    try:
        while True:
            # Client messages carry no meaning; reading detects disconnects.
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Live zipper watcher for %s disconnected", zippclip_id)
    finally:
        sender.cancel()
        try:
            with suppress(asyncio.CancelledError, WebSocketDisconnect):
                await sender
        finally:
            await unsubscribe()

"""Shared API dependencies for store access and zipper services."""

from typing import Annotated

from fastapi import Depends

from zipper_stage.repositories.zippclip_repo import WritableRecordStore, ZippclipRepository
from zipper_stage.services.zipper import ZipperService

_default_store: WritableRecordStore | None = None


def get_record_store() -> WritableRecordStore:
    """Return the process-wide SQL record store, creating it on first use."""
    global _default_store
    if _default_store is None:
        from zipper_stage.db.session import SessionLocal
        from zipper_stage.store.sql import SqlRecordStore

        _default_store = SqlRecordStore(SessionLocal)
    return _default_store


StoreDep = Annotated[WritableRecordStore, Depends(get_record_store)]


def get_zipper_service(store: StoreDep) -> ZipperService:
    """Return a zipper service bound to the request's record store."""
    return ZipperService(store)


def get_zippclip_repository(store: StoreDep) -> ZippclipRepository:
    """Return a zippclip repository bound to the request's record store."""
    return ZippclipRepository(store)


ZipperServiceDep = Annotated[ZipperService, Depends(get_zipper_service)]
RepositoryDep = Annotated[ZippclipRepository, Depends(get_zippclip_repository)]

# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from zipper_stage.api.v1.dependencies import get_record_store
from zipper_stage.core.settings import Settings
from zipper_stage.db.session import Base
from zipper_stage.main import app as fastapi_app
from zipper_stage.services.zipper import ZipperService
from zipper_stage.store.memory import InMemoryRecordStore
from zipper_stage.store.sql import SqlRecordStore

TEST_DB_URL = "sqlite+aiosqlite://"
BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

_CLIP_CLOCK = count(1)

ClipFactory = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture()
def store() -> InMemoryRecordStore:
    """Return an empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture()
def test_settings() -> Settings:
    """Provide settings with the reference traversal and listing defaults."""
    return Settings(
        chain_max_depth=10,
        parent_preview_levels=5,
        latest_limit=1,
        list_limit=20,
    )


@pytest.fixture()
def service(store: InMemoryRecordStore, test_settings: Settings) -> ZipperService:
    return ZipperService(store, test_settings)


@pytest_asyncio.fixture()
async def profile(store: InMemoryRecordStore) -> dict[str, Any]:
    """Create a baseline profile that owns the test clips."""
    return await store.insert(
        "profiles",
        {"id": "user-1", "username": "zipster", "full_name": "Zip Ster", "avatar_url": None},
    )


@pytest.fixture()
def add_clip(store: InMemoryRecordStore) -> ClipFactory:
    """Return a coroutine that inserts a zippclip with a strictly increasing timestamp."""

    async def _add(
        clip_id: str,
        parent: str | None = None,
        *,
        user_id: str | None = "user-1",
        created_at: datetime | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        values = {
            "id": clip_id,
            "user_id": user_id,
            "parent_zippclip_id": parent,
            "description": f"clip {clip_id}",
            "media_url": f"https://cdn.example/{clip_id}.mp4",
            "media_type": "video",
            "song": "Original Sound",
            "created_at": created_at or BASE_TIME + timedelta(minutes=next(_CLIP_CLOCK)),
        }
        values.update(extra)
        return await store.insert("zippclips", values)

    return _add


@pytest_asyncio.fixture()
async def sql_store() -> AsyncIterator[SqlRecordStore]:
    """Yield a SQL record store over a fresh in-memory SQLite database."""
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    try:
        yield SqlRecordStore(session_factory)
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def override_store(app: FastAPI, store: InMemoryRecordStore) -> Iterator[InMemoryRecordStore]:
    app.dependency_overrides[get_record_store] = lambda: store
    try:
        yield store
    finally:
        app.dependency_overrides.pop(get_record_store, None)


@pytest.fixture()
def client(app: FastAPI, override_store: InMemoryRecordStore) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client

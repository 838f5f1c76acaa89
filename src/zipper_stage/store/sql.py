"""SQLAlchemy-backed record store."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from zipper_stage.core.errors import StoreUnavailableError, UnknownCollectionError
from zipper_stage.db.session import Base
from zipper_stage.models import Profile, Zippclip

from .base import EMBEDDED_RELATIONS, Filters, Record
from .realtime import ChangeEvent, ChangeFeed, Handler, Subscription

_MODELS: dict[str, type[Base]] = {
    "profiles": Profile,
    "zippclips": Zippclip,
}

# Attribute holding the embedded relation on the ORM model.
_RELATION_ATTRS: dict[str, str] = {
    "zippclips": "profile",
}


def _columns(obj: Base) -> Record:
    mapper = inspect(obj).mapper
    return {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}


class SqlRecordStore:
    """Record store over an async SQLAlchemy session factory.

    Change notifications are published for writes made through this store
    instance; writes made by other processes are not observed.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        feed: ChangeFeed | None = None,
    ) -> None:
        self._session_factory = session_factory
        self.feed = feed or ChangeFeed()

    @staticmethod
    def _model(collection: str) -> type[Base]:
        try:
            return _MODELS[collection]
        except KeyError as err:
            raise UnknownCollectionError(collection) from err

    @staticmethod
    def _criteria(model: type[Base], filters: Filters) -> list[Any]:
        criteria = []
        for field, value in filters.items():
            column = getattr(model, field, None)
            if column is None:
                raise ValueError(f"{model.__name__} has no field {field!r}")
            criteria.append(column.is_(None) if value is None else column == value)
        return criteria

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError(str(exc)) from exc

    def _to_record(self, collection: str, obj: Base) -> Record:
        record = _columns(obj)
        relation = EMBEDDED_RELATIONS.get(collection)
        if relation is not None:
            related = getattr(obj, _RELATION_ATTRS[collection])
            record[relation[1]] = _columns(related) if related is not None else None
        return record

    async def fetch_by_id(self, collection: str, record_id: str) -> Record | None:
        model = self._model(collection)
        async with self._session() as session:
            obj = await session.get(model, record_id)
            return self._to_record(collection, obj) if obj is not None else None

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
        model = self._model(collection)
        stmt = select(model).where(*self._criteria(model, filters))
        if order_by is not None:
            column = getattr(model, order_by)
            if before is not None:
                stmt = stmt.where(column < before)
            primary = inspect(model).primary_key[0]
            if descending:
                stmt = stmt.order_by(column.desc(), primary.desc())
            else:
                stmt = stmt.order_by(column.asc(), primary.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._session() as session:
            result = await session.execute(stmt)
            return [self._to_record(collection, obj) for obj in result.scalars()]

    async def count_where(self, collection: str, filters: Filters) -> int:
        model = self._model(collection)
        stmt = select(func.count()).select_from(model).where(*self._criteria(model, filters))
        async with self._session() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    async def subscribe(
        self,
        collection: str,
        filters: Filters,
        on_insert: Handler | None = None,
        on_delete: Handler | None = None,
    ) -> Subscription:
        self._model(collection)
        return await self.feed.subscribe(collection, filters, on_insert, on_delete)

    async def insert(self, collection: str, values: Record) -> Record:
        """Persist a new record, then notify subscribers."""
        model = self._model(collection)
        async with self._session() as session:
            obj = model(**values)
            session.add(obj)
            await session.flush()
            record_id = _columns(obj)["id"]
            await session.commit()

        record = await self.fetch_by_id(collection, record_id)
        if record is None:  # pragma: no cover - deleted between commit and read
            raise StoreUnavailableError(f"{collection} {record_id} vanished after insert")
        await self.feed.publish(collection, ChangeEvent.INSERT, record)
        return record

    async def delete(self, collection: str, record_id: str) -> Record | None:
        """Delete a record by id, then notify subscribers."""
        model = self._model(collection)
        async with self._session() as session:
            obj = await session.get(model, record_id)
            if obj is None:
                return None
            record = self._to_record(collection, obj)
            await session.delete(obj)
            await session.commit()

        await self.feed.publish(collection, ChangeEvent.DELETE, record)
        return record

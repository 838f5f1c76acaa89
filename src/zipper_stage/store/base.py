"""Minimal record-store contract shared by every backend.

Records are plain dictionaries keyed by column name. Filters are equality
mappings (``{"parent_zippclip_id": some_id}``). Zippclip fetches embed the
owning profile under ``"profiles"`` so views can be built without a second
round trip.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .realtime import Handler, Subscription

Record = dict[str, Any]
Filters = Mapping[str, Any]

# collection -> (foreign key field, related collection); the related record is
# embedded under the related collection's name.
EMBEDDED_RELATIONS: dict[str, tuple[str, str]] = {
    "zippclips": ("user_id", "profiles"),
}


def matches_filters(record: Mapping[str, Any], filters: Filters) -> bool:
    """Return True if every filter field equals the record's value."""
    return all(record.get(field) == value for field, value in filters.items())


class RecordStore(Protocol):
    """Operations the zipper services need from a backing store.

    Every method may raise ``StoreUnavailableError`` when the backend cannot
    be reached.
    """

    async def fetch_by_id(self, collection: str, record_id: str) -> Record | None:
        """Return a single record, or None when it does not exist."""
        ...

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
        """Return records matching ``filters``.

        Args:
            collection: Collection (table) name.
            filters: Equality filters applied to every record.
            order_by: Field to sort on.
            descending: Sort newest/largest first when True.
            limit: Maximum number of records to return.
            before: Exclusive upper bound on ``order_by`` for keyset paging.
        """
        ...

    async def count_where(self, collection: str, filters: Filters) -> int:
        """Return the number of records matching ``filters``."""
        ...

    async def subscribe(
        self,
        collection: str,
        filters: Filters,
        on_insert: Handler | None = None,
        on_delete: Handler | None = None,
    ) -> Subscription:
        """Register handlers for inserts and deletes matching ``filters``."""
        ...

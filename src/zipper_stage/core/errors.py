"""Exception types shared by the record stores and zipper services."""

from __future__ import annotations


class ZipperError(Exception):
    """Base class for Zipper Stage errors."""


class StoreUnavailableError(ZipperError):
    """Raised when the backing record store cannot be reached."""


class UnknownCollectionError(ZipperError):
    """Raised when a store is asked for a collection it does not map."""

    def __init__(self, collection: str) -> None:
        super().__init__(f"Unknown collection: {collection}")
        self.collection = collection


class ParentNotFoundError(ZipperError):
    """Raised when a new zippclip references a parent that does not exist."""

    def __init__(self, parent_id: str) -> None:
        super().__init__(f"Parent zippclip not found: {parent_id}")
        self.parent_id = parent_id


class ZippclipNotFoundError(ZipperError):
    """Raised when a zippclip addressed by id does not exist."""

    def __init__(self, zippclip_id: str) -> None:
        super().__init__(f"Zippclip not found: {zippclip_id}")
        self.zippclip_id = zippclip_id

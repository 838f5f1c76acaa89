"""Pydantic schemas for the Zipper Stage API."""

from .zippclip import (
    ChainEnd,
    ChainLink,
    ChainStatusResponse,
    ChildrenSnapshot,
    ZippclipCreate,
    ZippclipView,
    ZipperCount,
    ZipperUser,
)

__all__ = [
    "ChainEnd",
    "ChainLink",
    "ChainStatusResponse",
    "ChildrenSnapshot",
    "ZippclipCreate",
    "ZippclipView",
    "ZipperCount",
    "ZipperUser",
]

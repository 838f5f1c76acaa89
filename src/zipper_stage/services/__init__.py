"""Service layer for Zipper Stage."""

from .chain import ChainWalk, ChainWalker, OriginResolver
from .children import ChildAggregator
from .publishing import delete_zippclip, publish_zippclip
from .zipper import ZipperService

__all__ = [
    "ChainWalk",
    "ChainWalker",
    "ChildAggregator",
    "OriginResolver",
    "ZipperService",
    "delete_zippclip",
    "publish_zippclip",
]

"""Record store backends consumed by the zipper services."""

from .base import EMBEDDED_RELATIONS, Filters, Record, RecordStore, matches_filters
from .memory import InMemoryRecordStore
from .realtime import ChangeEvent, ChangeFeed, Handler, Subscription
from .sql import SqlRecordStore

__all__ = [
    "EMBEDDED_RELATIONS",
    "ChangeEvent",
    "ChangeFeed",
    "Filters",
    "Handler",
    "InMemoryRecordStore",
    "Record",
    "RecordStore",
    "SqlRecordStore",
    "Subscription",
    "matches_filters",
]

"""Data access helpers."""

from .zippclip_repo import PARENT_FIELD, ZIPPCLIPS, WritableRecordStore, ZippclipRepository

__all__ = ["PARENT_FIELD", "ZIPPCLIPS", "WritableRecordStore", "ZippclipRepository"]

"""Zippclip-related Pydantic schemas.

Store records arrive as loosely-typed mappings (with the owning profile
nested under ``profiles``); they are mapped onto these typed views once,
at the boundary, so traversal code only ever handles ``ZippclipView``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

UNKNOWN_USERNAME = "unknown"
UNKNOWN_FULL_NAME = "Unknown User"
UNKNOWN_SONG = "Unknown Song"
DEFAULT_MEDIA_TYPE = "image"


class ZipperUser(BaseModel):
    """Owner details displayed alongside a zippclip."""

    username: str = UNKNOWN_USERNAME
    full_name: str = UNKNOWN_FULL_NAME
    avatar_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_missing(cls, data: object) -> object:
        if isinstance(data, Mapping):
            return {
                "username": data.get("username") or UNKNOWN_USERNAME,
                "full_name": data.get("full_name") or UNKNOWN_FULL_NAME,
                "avatar_url": data.get("avatar_url") or None,
            }
        return data


class ZippclipView(BaseModel):
    """Display fields of a zippclip as returned by chain and child queries."""

    id: str
    parent_zippclip_id: str | None = None
    user: ZipperUser = Field(default_factory=ZipperUser)
    description: str = ""
    media_url: str | None = None
    media_type: str = DEFAULT_MEDIA_TYPE
    song: str = UNKNOWN_SONG
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="before")
    @classmethod
    def _flatten_record(cls, data: object) -> object:
        if not isinstance(data, Mapping):
            return data

        record: dict[str, Any] = dict(data)
        profile = record.pop("profiles", None)
        if "user" not in record:
            record["user"] = profile or {}

        # Stored NULLs fall back to the display defaults.
        if not record.get("description"):
            record["description"] = ""
        if not record.get("media_type"):
            record["media_type"] = DEFAULT_MEDIA_TYPE
        if not record.get("song"):
            record["song"] = UNKNOWN_SONG
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> ZippclipView:
        """Build a view from a raw store record."""
        return cls.model_validate(record)


class ChainLink(ZippclipView):
    """A zippclip visited by a chain walk, with its distance from the start."""

    depth: int = Field(..., ge=0, description="0 for the starting zippclip")


class ChainEnd(str, Enum):
    """How a chain walk terminated."""

    ROOT = "root"
    TRUNCATED = "truncated"
    BROKEN = "broken"
    UNAVAILABLE = "unavailable"


class ChainStatusResponse(BaseModel):
    """Ancestry chain together with the reason the walk stopped."""

    status: ChainEnd
    links: list[ChainLink]


class ChildrenSnapshot(BaseModel):
    """Child count and newest children of a zippclip at one point in time."""

    post_id: str
    count: int = 0
    latest: list[ZippclipView] = Field(default_factory=list)


class ZipperCount(BaseModel):
    """Number of zippclips riding a given zippclip."""

    zippers: int


class ZippclipCreate(BaseModel):
    """Schema for publishing a new zippclip."""

    user_id: str | None = Field(None, description="Owning profile id")
    media_url: str = Field(..., min_length=1, description="Public URL of the uploaded media")
    media_type: Literal["image", "video"] = "image"
    description: str = Field("", max_length=2200)
    song: str = Field("Original Sound", max_length=300)
    song_avatar_url: str = ""
    parent_zippclip_id: str | None = Field(None, description="Zippclip this one rides, if any")

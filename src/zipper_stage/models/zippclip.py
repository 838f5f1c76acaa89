"""SQLAlchemy model for zippclips and their response chains."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from zipper_stage.db.session import Base
from zipper_stage.db.types import UTCDateTime
from zipper_stage.models.profile import Profile


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Zippclip(Base):
    """Short video or image post, optionally riding another zippclip.

    A zippclip whose ``parent_zippclip_id`` is NULL is the origin of its
    chain. The parent reference is set once on publish and never changed.
    """

    __tablename__ = "zippclips"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("profiles.id"),
        nullable=True,
    )

    # No foreign key: children of a deleted parent keep the dangling id.
    parent_zippclip_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_url: Mapped[str] = mapped_column(Text, nullable=False)
    media_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    song: Mapped[str | None] = mapped_column(Text, nullable=True)
    song_avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=_utcnow,
        nullable=False,
        index=True,
    )

    profile: Mapped[Profile | None] = relationship(Profile, lazy="joined")

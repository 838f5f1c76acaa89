# tests/test_schemas.py
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from zipper_stage.schemas.zippclip import ChainLink, ZippclipCreate, ZippclipView


def test_view_applies_display_defaults() -> None:
    """Stored NULLs and a missing profile fall back to display defaults."""
    view = ZippclipView.from_record(
        {
            "id": "z1",
            "parent_zippclip_id": None,
            "description": None,
            "media_url": "https://cdn/z1.jpg",
            "media_type": None,
            "song": None,
            "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
            "profiles": None,
        }
    )

    assert view.description == ""
    assert view.media_type == "image"
    assert view.song == "Unknown Song"
    assert view.user.username == "unknown"
    assert view.user.full_name == "Unknown User"
    assert view.user.avatar_url is None


def test_view_flattens_nested_profile() -> None:
    view = ZippclipView.from_record(
        {
            "id": "z2",
            "media_url": "https://cdn/z2.mp4",
            "media_type": "video",
            "song": "Track - Artist",
            "user_id": "u9",
            "song_avatar_url": "",
            "profiles": {"id": "u9", "username": "dj", "full_name": None, "avatar_url": "https://a/u9.png"},
        }
    )

    assert view.user.username == "dj"
    assert view.user.full_name == "Unknown User"
    assert view.user.avatar_url == "https://a/u9.png"
    assert view.song == "Track - Artist"
    assert "user_id" not in view.model_dump()


def test_chain_link_requires_non_negative_depth() -> None:
    with pytest.raises(ValidationError):
        ChainLink.model_validate({"id": "z", "depth": -1})


def test_create_payload_validation() -> None:
    payload = ZippclipCreate(media_url="https://cdn/a.mp4", media_type="video", parent_zippclip_id="p")
    assert payload.song == "Original Sound"
    assert payload.description == ""

    with pytest.raises(ValidationError):
        ZippclipCreate(media_url="")
    with pytest.raises(ValidationError):
        ZippclipCreate(media_url="https://cdn/a.gif", media_type="gif")

# tests/test_settings.py
import pytest
from pydantic import ValidationError

from zipper_stage.core.settings import Settings


def test_reference_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ZIPPER_CHAIN_MAX_DEPTH", "ZIPPER_LATEST_LIMIT", "ZIPPER_LIST_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.chain_max_depth == 10
    assert settings.parent_preview_levels == 5
    assert settings.latest_limit == 1
    assert settings.list_limit == 20


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZIPPER_CHAIN_MAX_DEPTH", "4")

    assert Settings(_env_file=None).chain_max_depth == 4


def test_bounds_are_validated() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, chain_max_depth=0)


def test_sync_url_for_migrations() -> None:
    settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///./z.db")
    assert settings.database_url_sync == "sqlite:///./z.db"

    pg = Settings(_env_file=None, database_url="postgresql+asyncpg://u:p@db/zip")
    assert pg.database_url_sync == "postgresql+psycopg://u:p@db/zip"

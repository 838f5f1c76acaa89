"""create profiles and zippclips

Revision ID: 5b1e7c2d9a40
Revises:
Create Date: 2026-10-18 09:12:44.518204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1e7c2d9a40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profile and zippclip tables."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "zippclips",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=True),
        # Plain column: children survive their parent's deletion.
        sa.Column("parent_zippclip_id", sa.String(length=36), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("media_url", sa.Text(), nullable=False),
        sa.Column("media_type", sa.String(length=16), nullable=True),
        sa.Column("song", sa.Text(), nullable=True),
        sa.Column("song_avatar_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_zippclips_parent_zippclip_id", "zippclips", ["parent_zippclip_id"], unique=False
    )
    op.create_index("ix_zippclips_created_at", "zippclips", ["created_at"], unique=False)


def downgrade() -> None:
    """Drop zippclip and profile tables."""
    op.drop_index("ix_zippclips_created_at", table_name="zippclips")
    op.drop_index("ix_zippclips_parent_zippclip_id", table_name="zippclips")
    op.drop_table("zippclips")
    op.drop_table("profiles")

"""tags and tag track membership

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19 00:00:01.000000
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the tag store tables."""
    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("color", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "name", name="uq_user_tag_name"),
    )
    op.create_index("ix_tags_user_id", "tags", ["user_id"])

    op.create_table(
        "tag_tracks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "tag_id",
            sa.Integer(),
            sa.ForeignKey("tags.id", ondelete="CASCADE", name="fk_tag_tracks_tag_id_tags"),
            nullable=False,
        ),
        sa.Column("track_id", sa.String(length=64), nullable=False),
        sa.UniqueConstraint("tag_id", "track_id", name="uq_tag_track"),
    )
    op.create_index("ix_tag_tracks_tag_id", "tag_tracks", ["tag_id"])
    op.create_index("ix_tag_tracks_track_id", "tag_tracks", ["track_id"])


def downgrade() -> None:
    """Drop the tag store tables."""
    op.drop_index("ix_tag_tracks_track_id", table_name="tag_tracks")
    op.drop_index("ix_tag_tracks_tag_id", table_name="tag_tracks")
    op.drop_table("tag_tracks")
    op.drop_index("ix_tags_user_id", table_name="tags")
    op.drop_table("tags")

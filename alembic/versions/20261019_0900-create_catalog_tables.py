"""Create catalog tables

Revision ID: create_catalog_tables
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "create_catalog_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"])
    op.create_index("idx_user_role", "users", ["role"])

    op.create_table(
        "community_channels",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("long_description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("cover_image", sa.String(length=1000), nullable=True),
        sa.Column("thumbnail_image", sa.String(length=1000), nullable=True),
        sa.Column("required_tier_level", sa.Integer(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("video_count", sa.Integer(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name=op.f("fk_community_channels_created_by_users")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_community_channels")),
    )
    op.create_index(op.f("ix_community_channels_id"), "community_channels", ["id"])
    op.create_index(
        op.f("ix_community_channels_slug"), "community_channels", ["slug"], unique=True
    )
    op.create_index(op.f("ix_community_channels_status"), "community_channels", ["status"])

    op.create_table(
        "channel_sections",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("channel_id", sa.Uuid(), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["channel_id"],
            ["community_channels.id"],
            name=op.f("fk_channel_sections_channel_id_community_channels"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_channel_sections")),
        sa.UniqueConstraint("channel_id", "slug", name="uq_channel_section_slug"),
    )
    op.create_index(op.f("ix_channel_sections_id"), "channel_sections", ["id"])
    op.create_index(op.f("ix_channel_sections_channel_id"), "channel_sections", ["channel_id"])

    op.create_table(
        "episodes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("channel_id", sa.Uuid(), nullable=False),
        sa.Column("section_id", sa.Uuid(), nullable=True),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("video_url", sa.String(length=1000), nullable=False),
        sa.Column("thumbnail_url", sa.String(length=1000), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("is_first_episode", sa.Boolean(), nullable=False),
        sa.Column("episode_number", sa.Integer(), nullable=True),
        sa.Column("season_number", sa.Integer(), nullable=True),
        sa.Column("required_tier_level", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("view_count", sa.Integer(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["channel_id"],
            ["community_channels.id"],
            name=op.f("fk_episodes_channel_id_community_channels"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["section_id"],
            ["channel_sections.id"],
            name=op.f("fk_episodes_section_id_channel_sections"),
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["created_by"], ["users.id"], name=op.f("fk_episodes_created_by_users")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_episodes")),
    )
    op.create_index(op.f("ix_episodes_id"), "episodes", ["id"])
    op.create_index(op.f("ix_episodes_slug"), "episodes", ["slug"], unique=True)
    op.create_index(op.f("ix_episodes_status"), "episodes", ["status"])
    op.create_index(op.f("ix_episodes_channel_id"), "episodes", ["channel_id"])
    op.create_index(op.f("ix_episodes_section_id"), "episodes", ["section_id"])
    op.create_index(
        "idx_episode_channel_order", "episodes", ["channel_id", "season_number", "episode_number"]
    )


def downgrade() -> None:
    op.drop_table("episodes")
    op.drop_table("channel_sections")
    op.drop_table("community_channels")
    op.drop_table("users")

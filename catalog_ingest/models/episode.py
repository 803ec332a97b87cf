"""Episode ORM model.

This module defines the Episode model: a single video with its public media
URLs, ordering metadata and access tier.
"""

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_ingest.models.base import (
    AuthoredMixin,
    Base,
    PublishableMixin,
    TimestampMixin,
    UUIDMixin,
)

if TYPE_CHECKING:
    from catalog_ingest.models.channel import Channel
    from catalog_ingest.models.section import ChannelSection


class EpisodeStatus(str, enum.Enum):
    """Episode publication status."""

    DRAFT = "draft"
    PUBLISHED = "published"
    UNLISTED = "unlisted"
    ARCHIVED = "archived"


class Episode(Base, UUIDMixin, TimestampMixin, AuthoredMixin, PublishableMixin):
    """Single video episode.

    Attributes:
        channel_id: Owning channel
        section_id: Optional section within the channel
        slug: Natural key (globally unique)
        title: Display title
        description: Optional description
        video_url: Public URL of the uploaded video
        thumbnail_url: Public URL of the extracted thumbnail (None if extraction failed)
        duration: Duration in seconds (unknown at ingest time)
        is_first_episode: Free preview episode flag
        episode_number: Episode number within the channel
        season_number: Season number
        required_tier_level: Minimum membership tier
        status: Publication status
        view_count: Number of views
        tags: Episode tags
    """

    __tablename__ = "episodes"

    # Foreign Keys
    channel_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("community_channels.id", ondelete="CASCADE"), nullable=False, index=True
    )
    section_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("channel_sections.id", ondelete="SET NULL"), index=True
    )

    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    # Media
    video_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String(1000))
    duration: Mapped[int | None] = mapped_column(Integer)

    # Access Control
    is_first_episode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    episode_number: Mapped[int | None] = mapped_column(Integer)
    season_number: Mapped[int | None] = mapped_column(Integer, default=1)
    required_tier_level: Mapped[int] = mapped_column(Integer, nullable=False, default=2)

    # Status
    status: Mapped[EpisodeStatus] = mapped_column(
        String(20),
        nullable=False,
        default=EpisodeStatus.DRAFT,
        index=True,
    )
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Relationships
    channel: Mapped["Channel"] = relationship("Channel", back_populates="episodes")
    section: Mapped["ChannelSection | None"] = relationship(
        "ChannelSection", back_populates="episodes"
    )

    __table_args__ = (
        Index("idx_episode_channel_order", "channel_id", "season_number", "episode_number"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Episode(id={self.id}, slug={self.slug}, status={self.status})>"


__all__ = [
    "Episode",
    "EpisodeStatus",
]

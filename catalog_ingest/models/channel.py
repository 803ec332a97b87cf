"""Channel ORM model.

A channel is the top-level collection of episodes (a show). Channels are
created once per slug; ``video_count`` is the only column the ingest job
updates afterwards.
"""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_ingest.models.base import (
    AuthoredMixin,
    Base,
    PublishableMixin,
    TimestampMixin,
    UUIDMixin,
)

if TYPE_CHECKING:
    from catalog_ingest.models.episode import Episode
    from catalog_ingest.models.section import ChannelSection


class ChannelStatus(str, enum.Enum):
    """Channel publication status."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Channel(Base, UUIDMixin, TimestampMixin, AuthoredMixin, PublishableMixin):
    """Video channel.

    Attributes:
        slug: Natural key (unique)
        title: Display title
        description: Short description
        long_description: Optional long-form description
        category: Channel category
        status: Publication status
        cover_image: Public URL of the cover art
        thumbnail_image: Public URL of a small thumbnail
        required_tier_level: Minimum membership tier to access the channel
        is_featured: Whether the channel is featured
        tags: Channel tags
        video_count: Aggregate number of episodes
        sort_order: Listing order
        sections: Ordered sections (1:N)
        episodes: Episodes (1:N)
    """

    __tablename__ = "community_channels"

    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    long_description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[ChannelStatus] = mapped_column(
        String(20),
        nullable=False,
        default=ChannelStatus.DRAFT,
        index=True,
    )

    # Media
    cover_image: Mapped[str | None] = mapped_column(String(1000))
    thumbnail_image: Mapped[str | None] = mapped_column(String(1000))

    # Access Control
    required_tier_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Metadata
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    video_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    sections: Mapped[list["ChannelSection"]] = relationship(
        "ChannelSection",
        back_populates="channel",
        cascade="all, delete-orphan",
        order_by="ChannelSection.sort_order",
    )
    episodes: Mapped[list["Episode"]] = relationship(
        "Episode", back_populates="channel", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Channel(id={self.id}, slug={self.slug}, status={self.status})>"


__all__ = [
    "Channel",
    "ChannelStatus",
]

"""Channel section ORM model."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_ingest.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from catalog_ingest.models.channel import Channel
    from catalog_ingest.models.episode import Episode


class ChannelSection(Base, UUIDMixin, TimestampMixin):
    """Ordered sub-grouping of episodes within a channel.

    Attributes:
        channel_id: Owning channel
        slug: Natural key, unique within the channel
        title: Display title
        description: Optional description
        sort_order: Position within the channel
    """

    __tablename__ = "channel_sections"

    channel_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("community_channels.id", ondelete="CASCADE"), nullable=False, index=True
    )
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    channel: Mapped["Channel"] = relationship("Channel", back_populates="sections")
    episodes: Mapped[list["Episode"]] = relationship("Episode", back_populates="section")

    __table_args__ = (UniqueConstraint("channel_id", "slug", name="uq_channel_section_slug"),)

    def __repr__(self) -> str:
        """String representation."""
        return f"<ChannelSection(id={self.id}, channel_id={self.channel_id}, slug={self.slug})>"


__all__ = [
    "ChannelSection",
]

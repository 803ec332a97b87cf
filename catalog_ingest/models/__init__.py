"""SQLAlchemy ORM models for the media catalog.

- User: identity directory (read-only for the ingest job)
- Channel → ChannelSection → Episode: the catalog hierarchy
"""

from catalog_ingest.models.base import (
    AuthoredMixin,
    Base,
    PublishableMixin,
    TimestampMixin,
    UUIDMixin,
)
from catalog_ingest.models.channel import Channel, ChannelStatus
from catalog_ingest.models.episode import Episode, EpisodeStatus
from catalog_ingest.models.section import ChannelSection
from catalog_ingest.models.user import User, UserRole

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "AuthoredMixin",
    "PublishableMixin",
    "User",
    "UserRole",
    "Channel",
    "ChannelStatus",
    "ChannelSection",
    "Episode",
    "EpisodeStatus",
]

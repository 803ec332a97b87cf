"""Catalog persistence for the ingest pipeline.

CatalogStore is the narrow interface the writer stages depend on; every
lookup is by natural key (channel slug, channel id + section slug, episode
slug). SqlCatalogStore implements it over the async SQLAlchemy models,
opening one session per operation so that a failed insert never poisons
later work in the same run.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from catalog_ingest.core.exceptions import (
    DatabaseError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
)
from catalog_ingest.core.logging import get_logger
from catalog_ingest.core.types import SessionFactory
from catalog_ingest.models.channel import Channel, ChannelStatus
from catalog_ingest.models.episode import Episode, EpisodeStatus
from catalog_ingest.models.section import ChannelSection
from catalog_ingest.models.user import User

logger = get_logger(__name__)


@dataclass
class ChannelRecord:
    """Stored channel as seen by the pipeline."""

    id: uuid.UUID
    slug: str
    cover_image: str | None = None


@dataclass
class ChannelDraft:
    """Values for a new channel row."""

    slug: str
    title: str
    description: str
    category: str
    cover_image: str | None
    created_by: uuid.UUID
    required_tier_level: int = 1


@dataclass
class SectionDraft:
    """Values for a new section row."""

    channel_id: uuid.UUID
    slug: str
    title: str
    sort_order: int = 0


@dataclass
class EpisodeDraft:
    """Values for a new episode row."""

    channel_id: uuid.UUID
    section_id: uuid.UUID | None
    slug: str
    title: str
    description: str | None
    video_url: str
    thumbnail_url: str | None
    episode_number: int
    season_number: int
    required_tier_level: int
    is_first_episode: bool
    created_by: uuid.UUID
    tags: list[str] = field(default_factory=list)


class CatalogStore(ABC):
    """Abstract catalog persistence."""

    @abstractmethod
    async def get_admin_user_id(self, roles: list[str]) -> uuid.UUID | None:
        """Id of any user holding one of ``roles``, or None."""

    @abstractmethod
    async def find_channel(self, slug: str) -> ChannelRecord | None:
        """Look up a channel by slug."""

    @abstractmethod
    async def create_channel(self, draft: ChannelDraft) -> uuid.UUID:
        """Insert a channel and return its id."""

    @abstractmethod
    async def find_section(self, channel_id: uuid.UUID, slug: str) -> uuid.UUID | None:
        """Look up a section by channel and slug."""

    @abstractmethod
    async def create_section(self, draft: SectionDraft) -> uuid.UUID:
        """Insert a section and return its id."""

    @abstractmethod
    async def find_episode(self, slug: str) -> uuid.UUID | None:
        """Look up an episode by slug."""

    @abstractmethod
    async def create_episode(self, draft: EpisodeDraft) -> uuid.UUID:
        """Insert an episode and return its id."""

    @abstractmethod
    async def count_episodes(self, channel_id: uuid.UUID) -> int:
        """Number of stored episodes for a channel."""

    @abstractmethod
    async def update_video_count(self, channel_id: uuid.UUID, count: int) -> None:
        """Set a channel's video count."""

    @abstractmethod
    async def update_channel_cover(self, slug: str, cover_image: str) -> uuid.UUID:
        """Set a channel's cover image.

        Raises:
            RecordNotFoundError: If no channel has ``slug``
        """


class SqlCatalogStore(CatalogStore):
    """CatalogStore over async SQLAlchemy sessions.

    Example:
        >>> store = SqlCatalogStore(session_factory)
        >>> channel = await store.find_channel("basketball-fundamentals")
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        """Initialize SqlCatalogStore.

        Args:
            session_factory: Async session factory
        """
        self.session_factory = session_factory

    async def get_admin_user_id(self, roles: list[str]) -> uuid.UUID | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(User.id).where(User.role.in_(roles)).order_by(User.created_at).limit(1)
            )
            return result.scalar_one_or_none()

    async def find_channel(self, slug: str) -> ChannelRecord | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Channel.id, Channel.cover_image).where(Channel.slug == slug)
            )
            row = result.first()
            if row is None:
                return None
            return ChannelRecord(id=row.id, slug=slug, cover_image=row.cover_image)

    async def create_channel(self, draft: ChannelDraft) -> uuid.UUID:
        channel = Channel(
            id=uuid.uuid4(),
            slug=draft.slug,
            title=draft.title,
            description=draft.description,
            category=draft.category,
            status=ChannelStatus.PUBLISHED,
            cover_image=draft.cover_image,
            required_tier_level=draft.required_tier_level,
            is_featured=False,
            tags=[],
            video_count=0,
            sort_order=0,
            created_by=draft.created_by,
            published_at=datetime.now(tz=UTC),
        )
        return await self._insert(channel, "Channel", "slug", draft.slug)

    async def find_section(self, channel_id: uuid.UUID, slug: str) -> uuid.UUID | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ChannelSection.id).where(
                    ChannelSection.channel_id == channel_id,
                    ChannelSection.slug == slug,
                )
            )
            return result.scalar_one_or_none()

    async def create_section(self, draft: SectionDraft) -> uuid.UUID:
        section = ChannelSection(
            id=uuid.uuid4(),
            channel_id=draft.channel_id,
            slug=draft.slug,
            title=draft.title,
            description=None,
            sort_order=draft.sort_order,
        )
        return await self._insert(section, "ChannelSection", "slug", draft.slug)

    async def find_episode(self, slug: str) -> uuid.UUID | None:
        async with self.session_factory() as session:
            result = await session.execute(select(Episode.id).where(Episode.slug == slug))
            return result.scalar_one_or_none()

    async def create_episode(self, draft: EpisodeDraft) -> uuid.UUID:
        episode = Episode(
            id=uuid.uuid4(),
            channel_id=draft.channel_id,
            section_id=draft.section_id,
            slug=draft.slug,
            title=draft.title,
            description=draft.description,
            video_url=draft.video_url,
            thumbnail_url=draft.thumbnail_url,
            duration=None,
            is_first_episode=draft.is_first_episode,
            episode_number=draft.episode_number,
            season_number=draft.season_number,
            required_tier_level=draft.required_tier_level,
            status=EpisodeStatus.PUBLISHED,
            view_count=0,
            tags=draft.tags,
            created_by=draft.created_by,
            published_at=datetime.now(tz=UTC),
        )
        return await self._insert(episode, "Episode", "slug", draft.slug)

    async def count_episodes(self, channel_id: uuid.UUID) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                select(func.count(Episode.id)).where(Episode.channel_id == channel_id)
            )
            return int(result.scalar_one())

    async def update_video_count(self, channel_id: uuid.UUID, count: int) -> None:
        async with self.session_factory() as session:
            await session.execute(
                update(Channel).where(Channel.id == channel_id).values(video_count=count)
            )
            await session.commit()

    async def update_channel_cover(self, slug: str, cover_image: str) -> uuid.UUID:
        async with self.session_factory() as session:
            result = await session.execute(
                update(Channel)
                .where(Channel.slug == slug)
                .values(cover_image=cover_image)
                .returning(Channel.id)
            )
            channel_id = result.scalar_one_or_none()
            if channel_id is None:
                await session.rollback()
                raise RecordNotFoundError("Channel", slug)
            await session.commit()
            return channel_id

    async def _insert(
        self,
        row: Channel | ChannelSection | Episode,
        model: str,
        key: str,
        value: str,
    ) -> uuid.UUID:
        """Insert one row in its own session and return the generated id."""
        async with self.session_factory() as session:
            session.add(row)
            try:
                await session.flush()
                row_id = row.id
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise RecordAlreadyExistsError(model, key, value) from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(f"Failed to insert {model}: {e}", operation="insert") from e

            logger.debug("Inserted row", model=model, key=value, id=str(row_id))
            return row_id


__all__ = [
    "CatalogStore",
    "ChannelDraft",
    "ChannelRecord",
    "EpisodeDraft",
    "SectionDraft",
    "SqlCatalogStore",
]

"""Idempotent catalog writer stages.

Each stage looks its entity up by natural key first and only creates what
is missing:

- upsert_channel: reuse by slug, else upload cover art and insert
- upsert_sections: reuse by (channel, slug), else insert, in sort order
- ingest_episode: skip by slug, else locate, upload, thumbnail, insert
- reconcile_video_count: write the channel's video count

Asset work only ever happens for episodes that are not yet in the catalog,
so a rerun after an interruption picks up exactly where it stopped.
"""

import uuid
from pathlib import Path

from catalog_ingest.config.ingest import IngestConfig
from catalog_ingest.core.exceptions import RecordNotFoundError, StorageError
from catalog_ingest.core.logging import get_logger
from catalog_ingest.core.types import SpreadsheetRecord
from catalog_ingest.services.ingest.catalog import (
    CatalogStore,
    ChannelDraft,
    EpisodeDraft,
    SectionDraft,
)
from catalog_ingest.services.ingest.context import EpisodeOutcome, IngestContext
from catalog_ingest.services.ingest.grouper import ChannelGroup
from catalog_ingest.services.ingest.locator import AssetLocator
from catalog_ingest.services.ingest.spreadsheet import parse_bool, parse_int, parse_tags
from catalog_ingest.services.ingest.thumbnail import FrameExtractor
from catalog_ingest.services.ingest.uploader import (
    ObjectStoreUploader,
    cover_key,
    thumbnail_key,
    video_key,
)

logger = get_logger(__name__)


class CatalogWriter:
    """Write channel groups into the catalog.

    Example:
        >>> writer = CatalogWriter(store, uploader, extractor, locator, config)
        >>> await writer.upsert_channel(ctx, group)
        >>> await writer.upsert_sections(ctx, group)
        >>> for record in group.episodes:
        ...     await writer.ingest_episode(ctx, group, record)
        >>> await writer.reconcile_video_count(ctx, group)
    """

    def __init__(
        self,
        store: CatalogStore,
        uploader: ObjectStoreUploader,
        extractor: FrameExtractor,
        locator: AssetLocator,
        config: IngestConfig,
    ) -> None:
        """Initialize CatalogWriter.

        Args:
            store: Catalog persistence
            uploader: Object store uploader
            extractor: Thumbnail frame extractor
            locator: Source video locator
            config: Ingest configuration
        """
        self.store = store
        self.uploader = uploader
        self.extractor = extractor
        self.locator = locator
        self.config = config
        self.columns = config.columns

    async def upsert_channel(self, ctx: IngestContext, group: ChannelGroup) -> uuid.UUID:
        """Reuse or create the channel row.

        An existing channel keeps its id and cover image untouched. A new
        channel gets its positional cover art uploaded first; missing cover
        art only leaves the cover empty.

        Args:
            ctx: Run context; the channel id is recorded in it
            group: Channel group

        Returns:
            Channel id

        Raises:
            StorageError: If the cover upload fails
            DatabaseError: If the insert fails
        """
        existing = await self.store.find_channel(group.slug)
        if existing is not None:
            logger.info(
                "Channel already exists, skipping",
                channel=group.slug,
                channel_id=str(existing.id),
                cover_image=existing.cover_image,
            )
            ctx.channel_ids[group.slug] = existing.id
            return existing.id

        cover_image: str | None = None
        if group.cover_art_path.is_file():
            cover_image = await self.uploader.upload(group.cover_art_path, cover_key(group.slug))
        else:
            logger.warning(
                "Cover art not found",
                channel=group.slug,
                path=str(group.cover_art_path),
            )

        channel_id = await self.store.create_channel(
            ChannelDraft(
                slug=group.slug,
                title=group.name,
                description=group.description,
                category=group.category,
                cover_image=cover_image,
                created_by=ctx.admin_user_id,
                required_tier_level=self.config.defaults.channel_tier_level,
            )
        )
        ctx.channel_ids[group.slug] = channel_id
        logger.info("Created channel", channel=group.slug, channel_id=str(channel_id))
        return channel_id

    async def upsert_sections(self, ctx: IngestContext, group: ChannelGroup) -> None:
        """Reuse or create every section of a channel, in ascending sort order.

        Args:
            ctx: Run context; section ids are recorded in it
            group: Channel group whose channel is already upserted
        """
        channel_id = ctx.channel_ids[group.slug]
        for section in group.sorted_sections():
            section_id = await self.store.find_section(channel_id, section.slug)
            if section_id is None:
                section_id = await self.store.create_section(
                    SectionDraft(
                        channel_id=channel_id,
                        slug=section.slug,
                        title=section.title,
                        sort_order=section.order,
                    )
                )
                logger.info("Created section", channel=group.slug, section=section.slug)
            else:
                logger.info("Section already exists, skipping", channel=group.slug, section=section.slug)

            ctx.section_ids[ctx.section_key(group.slug, section.slug)] = section_id

    async def ingest_episode(
        self,
        ctx: IngestContext,
        group: ChannelGroup,
        record: SpreadsheetRecord,
    ) -> EpisodeOutcome:
        """Create one episode unless it already exists.

        Args:
            ctx: Run context
            group: Channel group the row belongs to
            record: Spreadsheet row

        Returns:
            EXISTS, MISSING_ASSET or CREATED

        Raises:
            StorageError: If the video upload fails
            DatabaseError: If the insert fails
        """
        columns = self.columns
        slug = record.get(columns.episode_slug, "")
        title = record.get(columns.episode_title, "")

        if await self.store.find_episode(slug) is not None:
            logger.info("Episode already exists, skipping", channel=group.slug, episode=slug)
            return EpisodeOutcome.EXISTS

        video_path = self.locator.locate(
            group.index,
            group.slug,
            record.get(columns.episode_number, ""),
            slug,
            record.get(columns.file_name, ""),
        )
        if video_path is None:
            logger.warning("Video file not found", channel=group.slug, episode=slug, title=title)
            return EpisodeOutcome.MISSING_ASSET

        video_url = await self.uploader.upload(video_path, video_key(group.slug, slug))
        thumbnail_url = await self._thumbnail(ctx, group.slug, slug, video_path)

        defaults = self.config.defaults
        episode_id = await self.store.create_episode(
            EpisodeDraft(
                channel_id=ctx.channel_ids[group.slug],
                section_id=ctx.section_id(group.slug, record.get(columns.section_slug, "")),
                slug=slug,
                title=title,
                description=record.get(columns.episode_description) or None,
                video_url=video_url,
                thumbnail_url=thumbnail_url,
                episode_number=parse_int(record.get(columns.episode_number), 0),
                season_number=parse_int(record.get(columns.season_number), defaults.season_number),
                required_tier_level=parse_int(
                    record.get(columns.required_tier_level), defaults.episode_tier_level
                ),
                is_first_episode=parse_bool(record.get(columns.is_first_episode)),
                created_by=ctx.admin_user_id,
                tags=parse_tags(record.get(columns.tags)),
            )
        )
        logger.info(
            "Created episode",
            channel=group.slug,
            episode=slug,
            episode_id=str(episode_id),
            has_thumbnail=thumbnail_url is not None,
        )
        return EpisodeOutcome.CREATED

    async def _thumbnail(
        self,
        ctx: IngestContext,
        channel_slug: str,
        episode_slug: str,
        video_path: Path,
    ) -> str | None:
        """Extract and upload a thumbnail; any failure yields None."""
        output_path = ctx.scratch_dir / f"{channel_slug}-{episode_slug}.jpg"
        try:
            frame = await self.extractor.extract(video_path, output_path)
            if frame is None:
                return None
            return await self.uploader.upload(frame, thumbnail_key(channel_slug, episode_slug))
        except (StorageError, OSError) as e:
            logger.warning(
                "Thumbnail unavailable",
                channel=channel_slug,
                episode=episode_slug,
                error=str(e),
            )
            return None
        finally:
            output_path.unlink(missing_ok=True)

    async def reconcile_video_count(self, ctx: IngestContext, group: ChannelGroup) -> int:
        """Write the channel's video count.

        With the ``declared`` policy the count is the number of spreadsheet
        rows for the channel, including rows skipped for missing assets.
        With ``catalog`` it is the number of episodes actually stored.

        Args:
            ctx: Run context
            group: Channel group

        Returns:
            The count written
        """
        channel_id = ctx.channel_ids[group.slug]
        if self.config.video_count_policy == "catalog":
            count = await self.store.count_episodes(channel_id)
        else:
            count = len(group.episodes)

        await self.store.update_video_count(channel_id, count)
        logger.info(
            "Updated video count",
            channel=group.slug,
            video_count=count,
            policy=self.config.video_count_policy,
        )
        return count

    async def replace_channel_cover(self, channel_slug: str, image_path: Path) -> str:
        """Upload a new cover image for an existing channel.

        The image overwrites the channel's cover key, then the channel row
        is pointed at it.

        Args:
            channel_slug: Channel slug
            image_path: New cover image

        Returns:
            Public URL of the cover

        Raises:
            RecordNotFoundError: If the channel does not exist
        """
        if await self.store.find_channel(channel_slug) is None:
            raise RecordNotFoundError("Channel", channel_slug)

        url = await self.uploader.upload(image_path, cover_key(channel_slug), allow_overwrite=True)
        await self.store.update_channel_cover(channel_slug, url)
        logger.info("Replaced channel cover", channel=channel_slug, url=url)
        return url


__all__ = ["CatalogWriter"]

"""Ingest pipeline orchestration.

Runs the whole job as a sequence of stages:

    INIT → PARSE → GROUP → CHANNELS → CLEANUP → DONE

INIT checks the run preconditions (frame extractor installed, an admin
user to own created rows) and creates the scratch directory before any
catalog write. A precondition failure, or an unreadable spreadsheet,
aborts the run. Within CHANNELS failures are contained: a channel whose
own row or sections cannot be written is skipped, and a failing episode
is logged and the next one runs. CLEANUP removes the scratch directory
whenever INIT got far enough to create it.
"""

import shutil
from datetime import UTC, datetime

from catalog_ingest.config.ingest import IngestConfig
from catalog_ingest.core.exceptions import FrameExtractorUnavailableError, NoAdminUserError
from catalog_ingest.core.logging import get_logger
from catalog_ingest.core.state_machine import StateMachine, create_run_state_machine
from catalog_ingest.services.ingest.catalog import CatalogStore
from catalog_ingest.services.ingest.context import (
    ChannelReport,
    EpisodeOutcome,
    IngestContext,
    IngestReport,
    RunStage,
)
from catalog_ingest.services.ingest.grouper import ChannelGroup, group_records
from catalog_ingest.services.ingest.spreadsheet import read_spreadsheet
from catalog_ingest.services.ingest.thumbnail import FrameExtractor
from catalog_ingest.services.ingest.writer import CatalogWriter

logger = get_logger(__name__)


class IngestPipeline:
    """Drive one ingest run end to end.

    Example:
        >>> pipeline = IngestPipeline(writer=writer, store=store, extractor=extractor, config=config)
        >>> report = await pipeline.run()
        >>> report.episodes_created
        4
    """

    def __init__(
        self,
        writer: CatalogWriter,
        store: CatalogStore,
        extractor: FrameExtractor,
        config: IngestConfig,
    ) -> None:
        """Initialize IngestPipeline.

        Args:
            writer: Catalog writer stages
            store: Catalog persistence, used for the admin lookup
            extractor: Frame extractor, checked for availability
            config: Ingest configuration
        """
        self.writer = writer
        self.store = store
        self.extractor = extractor
        self.config = config
        self.state: StateMachine[RunStage] = create_run_state_machine()

    async def run(self) -> IngestReport:
        """Run the ingest job.

        Returns:
            Per-channel summary of the run

        Raises:
            FrameExtractorUnavailableError: If ffmpeg is not installed
            NoAdminUserError: If no admin user exists
            SpreadsheetError: If the spreadsheet is missing or empty
        """
        self.state = create_run_state_machine()
        scratch_dir = self.config.scratch_dir
        logger.info("Starting ingest", csv=str(self.config.csv_path), assets=str(self.config.assets_root))

        ctx: IngestContext | None = None
        try:
            ctx = await self._init()

            self.state.transition_to(RunStage.PARSE)
            records = read_spreadsheet(self.config.csv_path, required_column=self.config.columns.channel_name)

            self.state.transition_to(RunStage.GROUP)
            groups = group_records(records, self.config.cover_art_path, self.config.columns)

            self.state.transition_to(RunStage.CHANNELS)
            for group in groups.values():
                await self._process_channel(ctx, group)
        finally:
            self.state.transition_to(RunStage.CLEANUP)
            # Nothing to clean up when INIT failed before creating the directory
            if ctx is not None:
                shutil.rmtree(scratch_dir, ignore_errors=True)
                logger.debug("Removed scratch directory", path=str(scratch_dir))

        self.state.transition_to(RunStage.DONE)
        assert ctx is not None
        report = ctx.report
        report.completed_at = datetime.now(tz=UTC)
        self._log_summary(report)
        return report

    async def _init(self) -> IngestContext:
        """Check preconditions and build the run context."""
        if not self.extractor.is_available():
            raise FrameExtractorUnavailableError(self.config.thumbnail.executable)

        roles = self.config.defaults.admin_roles
        admin_user_id = await self.store.get_admin_user_id(roles)
        if admin_user_id is None:
            raise NoAdminUserError(roles)

        scratch_dir = self.config.scratch_dir
        scratch_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Preconditions satisfied", admin_user_id=str(admin_user_id), scratch_dir=str(scratch_dir))
        return IngestContext(admin_user_id=admin_user_id, scratch_dir=scratch_dir)

    async def _process_channel(self, ctx: IngestContext, group: ChannelGroup) -> ChannelReport:
        """Upsert a channel, its sections and its episodes, then reconcile its count."""
        report = ChannelReport(slug=group.slug, declared=len(group.episodes))
        ctx.report.channels.append(report)
        logger.info("Processing channel", channel=group.slug, index=group.index, episodes=report.declared)

        try:
            await self.writer.upsert_channel(ctx, group)
            await self.writer.upsert_sections(ctx, group)
        except Exception as e:
            report.error = str(e)
            logger.error("Channel failed, skipping", channel=group.slug, error=str(e), exc_info=True)
            return report

        columns = self.config.columns
        for record in group.episodes:
            slug = record.get(columns.episode_slug, "")
            try:
                outcome = await self.writer.ingest_episode(ctx, group, record)
            except Exception as e:
                outcome = EpisodeOutcome.FAILED
                logger.error(
                    "Episode failed",
                    channel=group.slug,
                    episode=slug,
                    title=record.get(columns.episode_title, ""),
                    error=str(e),
                    exc_info=True,
                )
            report.outcomes.append((slug, outcome))

        try:
            report.video_count = await self.writer.reconcile_video_count(ctx, group)
        except Exception as e:
            report.error = str(e)
            logger.error("Video count update failed", channel=group.slug, error=str(e), exc_info=True)

        return report

    def _log_summary(self, report: IngestReport) -> None:
        for channel in report.channels:
            logger.info("Channel summary", **channel.to_dict())
        logger.info(
            "Ingest complete",
            channels=len(report.channels),
            channels_failed=report.channels_failed,
            episodes_created=report.episodes_created,
        )


__all__ = ["IngestPipeline"]

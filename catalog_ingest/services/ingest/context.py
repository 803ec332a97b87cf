"""Run context and reporting types for the ingest pipeline.

IngestContext is the only state carried across loop iterations: the ids of
channels and sections created or reused so far, plus the per-channel
report that ends up in the run summary.
"""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path


class RunStage(str, Enum):
    """Stages of an ingest run."""

    INIT = "init"
    PARSE = "parse"
    GROUP = "group"
    CHANNELS = "channels"
    CLEANUP = "cleanup"
    DONE = "done"


class EpisodeOutcome(str, Enum):
    """Result of processing one episode row."""

    CREATED = "created"
    EXISTS = "exists"
    MISSING_ASSET = "missing_asset"
    FAILED = "failed"


@dataclass
class ChannelReport:
    """Per-channel tally for the run summary.

    Attributes:
        slug: Channel slug
        declared: Episode rows declared in the spreadsheet
        outcomes: (episode slug, outcome) per row, in row order
        video_count: Value written to the channel's video count
        error: Error message if the channel itself could not be upserted
    """

    slug: str
    declared: int = 0
    outcomes: list[tuple[str, EpisodeOutcome]] = field(default_factory=list)
    video_count: int | None = None
    error: str | None = None

    def count(self, outcome: EpisodeOutcome) -> int:
        return sum(1 for _, o in self.outcomes if o == outcome)

    @property
    def created(self) -> int:
        return self.count(EpisodeOutcome.CREATED)

    @property
    def skipped_existing(self) -> int:
        return self.count(EpisodeOutcome.EXISTS)

    @property
    def missing_asset(self) -> int:
        return self.count(EpisodeOutcome.MISSING_ASSET)

    @property
    def failed(self) -> int:
        return self.count(EpisodeOutcome.FAILED)

    def to_dict(self) -> dict[str, int | str | None]:
        return {
            "channel": self.slug,
            "declared": self.declared,
            "created": self.created,
            "skipped_existing": self.skipped_existing,
            "missing_asset": self.missing_asset,
            "failed": self.failed,
            "video_count": self.video_count,
            "error": self.error,
        }


@dataclass
class IngestReport:
    """Summary of a whole run.

    Attributes:
        channels: Report per channel, in discovery order
        started_at: Run start time
        completed_at: Run completion time
    """

    channels: list[ChannelReport] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    completed_at: datetime | None = None

    def channel(self, slug: str) -> ChannelReport | None:
        """Look up a channel's report by slug."""
        return next((c for c in self.channels if c.slug == slug), None)

    @property
    def episodes_created(self) -> int:
        return sum(c.created for c in self.channels)

    @property
    def channels_failed(self) -> int:
        return sum(1 for c in self.channels if c.error is not None)


@dataclass
class IngestContext:
    """State threaded through the stages of a run.

    Attributes:
        admin_user_id: Identity stamped as creator on new rows
        scratch_dir: Working directory for extracted thumbnails
        channel_ids: Channel slug -> id, for channels created or reused
        section_ids: ``"<channel-slug>:<section-slug>"`` -> id
        report: Run summary being accumulated
    """

    admin_user_id: uuid.UUID
    scratch_dir: Path
    channel_ids: dict[str, uuid.UUID] = field(default_factory=dict)
    section_ids: dict[str, uuid.UUID] = field(default_factory=dict)
    report: IngestReport = field(default_factory=IngestReport)

    @staticmethod
    def section_key(channel_slug: str, section_slug: str) -> str:
        return f"{channel_slug}:{section_slug}"

    def section_id(self, channel_slug: str, section_slug: str) -> uuid.UUID | None:
        return self.section_ids.get(self.section_key(channel_slug, section_slug))


__all__ = [
    "ChannelReport",
    "EpisodeOutcome",
    "IngestContext",
    "IngestReport",
    "RunStage",
]

"""Channel/section grouping of spreadsheet records.

A single pass over the records builds the channel hierarchy in discovery
order. Channel attributes come from the first row naming the channel and
section attributes from the first row naming the section; later rows only
add episodes.
"""

from dataclasses import dataclass, field
from pathlib import Path

from catalog_ingest.config.ingest import SpreadsheetColumns
from catalog_ingest.core.logging import get_logger
from catalog_ingest.core.types import SpreadsheetRecord
from catalog_ingest.services.ingest.spreadsheet import parse_int

logger = get_logger(__name__)


@dataclass
class SectionGroup:
    """A section as first declared in the spreadsheet.

    Attributes:
        slug: Section slug, unique within its channel
        title: Section title
        order: Sort order (0 when empty or unparsable)
    """

    slug: str
    title: str
    order: int = 0


@dataclass
class ChannelGroup:
    """A channel and every spreadsheet row that belongs to it.

    Attributes:
        slug: Channel slug
        name: Channel title
        description: Channel description
        category: Channel category
        index: 1-based discovery order
        cover_art_path: Positional cover image (``<cover_art_dir>/<index>.png``)
        sections: Section slug -> SectionGroup, in discovery order
        episodes: Rows for this channel, in spreadsheet order
    """

    slug: str
    name: str
    description: str
    category: str
    index: int
    cover_art_path: Path
    sections: dict[str, SectionGroup] = field(default_factory=dict)
    episodes: list[SpreadsheetRecord] = field(default_factory=list)

    def sorted_sections(self) -> list[SectionGroup]:
        """Sections in ascending sort order, ties kept in discovery order."""
        return sorted(self.sections.values(), key=lambda s: s.order)


def group_records(
    records: list[SpreadsheetRecord],
    cover_art_dir: Path,
    columns: SpreadsheetColumns | None = None,
) -> dict[str, ChannelGroup]:
    """Group spreadsheet records into channels and sections.

    Args:
        records: Parsed spreadsheet rows
        cover_art_dir: Directory holding ``<index>.png`` cover images
        columns: Spreadsheet column names

    Returns:
        Channel slug -> ChannelGroup, in discovery order
    """
    columns = columns or SpreadsheetColumns()
    channels: dict[str, ChannelGroup] = {}

    for record in records:
        channel_slug = record.get(columns.channel_slug, "")
        channel = channels.get(channel_slug)
        if channel is None:
            # Cover art is matched by position, not slug: reordering rows reassigns artwork.
            index = len(channels) + 1
            channel = ChannelGroup(
                slug=channel_slug,
                name=record.get(columns.channel_name, ""),
                description=record.get(columns.channel_description, ""),
                category=record.get(columns.channel_category, ""),
                index=index,
                cover_art_path=cover_art_dir / f"{index}.png",
            )
            channels[channel_slug] = channel

        section_slug = record.get(columns.section_slug, "")
        if section_slug not in channel.sections:
            channel.sections[section_slug] = SectionGroup(
                slug=section_slug,
                title=record.get(columns.section_name, ""),
                order=parse_int(record.get(columns.section_order), 0),
            )

        channel.episodes.append(record)

    logger.info(
        "Grouped spreadsheet records",
        channels=len(channels),
        sections=sum(len(c.sections) for c in channels.values()),
        episodes=len(records),
    )
    return channels


__all__ = [
    "ChannelGroup",
    "SectionGroup",
    "group_records",
]

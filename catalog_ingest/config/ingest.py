"""Ingest job configuration models.

This module provides typed Pydantic configuration for the catalog ingest run:
- Input locations (spreadsheet, cover art, videos root)
- Thumbnail capture settings
- Catalog defaults and the video count reconciliation policy
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class SpreadsheetColumns(BaseModel):
    """Spreadsheet column names consumed by the pipeline.

    Attributes:
        channel_name: Channel display name
        channel_slug: Channel natural key
        channel_description: Channel description
        channel_category: Channel category
        section_name: Section title
        section_slug: Section natural key within the channel
        section_order: Section sort order
        episode_number: Episode number within the channel
        episode_title: Episode title
        episode_slug: Episode natural key
        episode_description: Episode description
        file_name: Legacy source file name
        required_tier_level: Minimum membership tier
        is_first_episode: "true" marks the free first episode
        season_number: Season number
        tags: Comma-separated tags
    """

    channel_name: str = "Channel Name"
    channel_slug: str = "Channel Slug"
    channel_description: str = "Channel Description"
    channel_category: str = "Channel Category"
    section_name: str = "Section Name"
    section_slug: str = "Section Slug"
    section_order: str = "Section Order"
    episode_number: str = "Episode Number"
    episode_title: str = "Episode Title"
    episode_slug: str = "Episode Slug"
    episode_description: str = "Episode Description"
    file_name: str = "File Name"
    required_tier_level: str = "Required Tier Level"
    is_first_episode: str = "Is First Episode"
    season_number: str = "Season Number"
    tags: str = "Tags"


class ThumbnailConfig(BaseModel):
    """Thumbnail frame capture configuration.

    Attributes:
        timestamps: Seek positions tried in order before a no-seek capture
        quality: JPEG quality scale passed to ffmpeg (2 = high quality)
        executable: Frame extraction executable name
    """

    timestamps: list[str] = Field(
        default_factory=lambda: ["00:00:01", "00:00:02", "00:00:00.5"],
        description="Seek timestamps tried in order",
    )
    quality: int = Field(default=2, ge=1, le=31, description="ffmpeg q:v scale")
    executable: str = Field(default="ffmpeg", description="Frame extraction executable")


class CatalogDefaults(BaseModel):
    """Defaults stamped onto rows created by the ingest run.

    Attributes:
        admin_roles: Roles accepted as the creating identity
        channel_tier_level: Required tier for new channels
        episode_tier_level: Fallback tier when the spreadsheet value is empty or zero
        season_number: Fallback season when the spreadsheet value is empty or zero
    """

    admin_roles: list[str] = Field(default_factory=lambda: ["admin", "super_admin"])
    channel_tier_level: int = Field(default=1, ge=0)
    episode_tier_level: int = Field(default=2, ge=0)
    season_number: int = Field(default=1, ge=0)


class IngestConfig(BaseModel):
    """Complete ingest run configuration.

    Relative asset directories are anchored under ``assets_root``.

    Attributes:
        csv_path: Spreadsheet describing channels, sections and episodes
        assets_root: Root of the asset layout
        cover_art_dir: Directory of ``<index>.png`` cover images
        videos_root: Directory of per-channel video folders
        scratch_dir: Working directory for extracted thumbnails
        video_count_policy: How channel video counts are reconciled
        columns: Spreadsheet column names
        thumbnail: Thumbnail capture settings
        defaults: Catalog defaults
    """

    csv_path: Path = Field(default=Path("data/episodes-database-structure.csv"))
    assets_root: Path = Field(default=Path("vids"))
    cover_art_dir: Path = Field(default=Path("cover-art"))
    videos_root: Path = Field(default=Path("videos"))
    scratch_dir: Path = Field(default=Path("temp-thumbnails"))
    video_count_policy: Literal["declared", "catalog"] = Field(
        default="declared",
        description="'declared' counts spreadsheet rows, 'catalog' counts stored episodes",
    )
    columns: SpreadsheetColumns = Field(default_factory=SpreadsheetColumns)
    thumbnail: ThumbnailConfig = Field(default_factory=ThumbnailConfig)
    defaults: CatalogDefaults = Field(default_factory=CatalogDefaults)

    @field_validator("csv_path", "assets_root", "cover_art_dir", "videos_root", "scratch_dir")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        """Expand ``~`` in configured paths."""
        return v.expanduser()

    @property
    def cover_art_path(self) -> Path:
        """Cover art directory anchored under assets_root."""
        return self.assets_root / self.cover_art_dir

    @property
    def videos_path(self) -> Path:
        """Videos root anchored under assets_root."""
        return self.assets_root / self.videos_root


__all__ = [
    "CatalogDefaults",
    "IngestConfig",
    "SpreadsheetColumns",
    "ThumbnailConfig",
]

"""Bulk catalog ingestion.

Reads the episode spreadsheet, groups rows by channel, and idempotently
creates channels, sections and episodes with their uploaded media.
"""

from catalog_ingest.services.ingest.catalog import CatalogStore, SqlCatalogStore
from catalog_ingest.services.ingest.context import (
    ChannelReport,
    EpisodeOutcome,
    IngestContext,
    IngestReport,
    RunStage,
)
from catalog_ingest.services.ingest.pipeline import IngestPipeline
from catalog_ingest.services.ingest.writer import CatalogWriter

__all__ = [
    "CatalogStore",
    "CatalogWriter",
    "ChannelReport",
    "EpisodeOutcome",
    "IngestContext",
    "IngestPipeline",
    "IngestReport",
    "RunStage",
    "SqlCatalogStore",
]

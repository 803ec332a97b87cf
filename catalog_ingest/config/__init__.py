"""Ingest job configuration models."""

from catalog_ingest.config.ingest import (
    CatalogDefaults,
    IngestConfig,
    SpreadsheetColumns,
    ThumbnailConfig,
)

__all__ = [
    "CatalogDefaults",
    "IngestConfig",
    "SpreadsheetColumns",
    "ThumbnailConfig",
]

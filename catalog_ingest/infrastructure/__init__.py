"""Infrastructure layer components.

This module provides clients for external systems: the HTTP client,
the object store, and the ffmpeg frame extractor.
"""

from catalog_ingest.infrastructure.blob_storage import BlobStorageClient, ObjectStore
from catalog_ingest.infrastructure.ffmpeg import FFmpegError, FFmpegWrapper
from catalog_ingest.infrastructure.http_client import HTTPClient

__all__ = ["BlobStorageClient", "FFmpegError", "FFmpegWrapper", "HTTPClient", "ObjectStore"]

"""Object store uploads with deterministic keys.

Every asset is stored under a key derived from catalog slugs, so a rerun
targets the same key. When the store reports the key already exists the
upload is treated as done and the key's public URL is returned. Objects
are served with the MIME type of their key, not of the local file.
"""

from pathlib import Path, PurePosixPath

from catalog_ingest.core.exceptions import BlobAlreadyExistsError, StorageError
from catalog_ingest.core.logging import get_logger
from catalog_ingest.infrastructure.blob_storage import ObjectStore

logger = get_logger(__name__)

CONTENT_TYPES = {
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".webm": "video/webm",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: Path | str) -> str:
    """MIME type for a file name or object key, by extension."""
    return CONTENT_TYPES.get(PurePosixPath(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


def cover_key(channel_slug: str) -> str:
    return f"cover-arts/{channel_slug}.png"


def video_key(channel_slug: str, episode_slug: str) -> str:
    return f"videos/{channel_slug}/{episode_slug}.mp4"


def thumbnail_key(channel_slug: str, episode_slug: str) -> str:
    return f"thumbnails/{channel_slug}/{episode_slug}.jpg"


class ObjectStoreUploader:
    """Upload local files to the object store.

    Example:
        >>> uploader = ObjectStoreUploader(store)
        >>> url = await uploader.upload(Path("ep.mp4"), video_key("a", "ep"))
    """

    def __init__(self, store: ObjectStore) -> None:
        """Initialize ObjectStoreUploader.

        Args:
            store: Durable object store
        """
        self.store = store

    async def upload(self, path: Path, key: str, allow_overwrite: bool = False) -> str:
        """Upload a file under ``key``.

        Args:
            path: Local file
            key: Destination key
            allow_overwrite: Replace an existing object

        Returns:
            Public URL of the object

        Raises:
            StorageError: If the upload fails for any reason other than an existing key
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}", key=key) from e

        content_type = content_type_for(key)
        try:
            url = await self.store.put(key, data, content_type, allow_overwrite=allow_overwrite)
        except BlobAlreadyExistsError:
            url = self.store.public_url(key)
            logger.info("Object already exists, reusing", key=key, url=url)
            return url

        logger.info("Uploaded object", key=key, content_type=content_type, size=len(data))
        return url


__all__ = [
    "CONTENT_TYPES",
    "ObjectStoreUploader",
    "content_type_for",
    "cover_key",
    "thumbnail_key",
    "video_key",
]

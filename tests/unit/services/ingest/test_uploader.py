"""Unit tests for object store uploads."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_ingest.core.exceptions import BlobAlreadyExistsError, StorageError
from catalog_ingest.services.ingest.uploader import (
    ObjectStoreUploader,
    content_type_for,
    cover_key,
    thumbnail_key,
    video_key,
)


@pytest.mark.unit
class TestKeys:
    """Tests for deterministic object keys."""

    def test_cover_key(self):
        assert cover_key("channel-a") == "cover-arts/channel-a.png"

    def test_video_key(self):
        assert video_key("channel-a", "intro") == "videos/channel-a/intro.mp4"

    def test_thumbnail_key(self):
        assert thumbnail_key("channel-a", "intro") == "thumbnails/channel-a/intro.jpg"


@pytest.mark.unit
class TestContentType:
    """Tests for content_type_for."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.mp4", "video/mp4"),
            ("a.MOV", "video/quicktime"),
            ("a.webm", "video/webm"),
            ("a.png", "image/png"),
            ("a.jpg", "image/jpeg"),
            ("a.jpeg", "image/jpeg"),
            ("a.avi", "application/octet-stream"),
            ("noext", "application/octet-stream"),
        ],
    )
    def test_by_extension(self, name, expected):
        """Test MIME type is derived from the local extension."""
        assert content_type_for(Path(name)) == expected

    def test_object_key(self):
        assert content_type_for("thumbnails/channel-a/a-welcome.jpg") == "image/jpeg"


@pytest.mark.unit
class TestObjectStoreUploader:
    """Tests for ObjectStoreUploader.upload."""

    @pytest.fixture
    def store(self):
        store = MagicMock()
        store.put = AsyncMock(return_value="https://blob.test/videos/a/b.mp4")
        store.public_url.side_effect = lambda key: f"https://blob.test/{key}"
        return store

    @pytest.mark.asyncio
    async def test_upload_returns_store_url(self, store, tmp_path):
        """Test the content type follows the key, not the source extension."""
        path = tmp_path / "b.mov"
        path.write_bytes(b"movie")

        url = await ObjectStoreUploader(store).upload(path, "videos/a/b.mp4")

        assert url == "https://blob.test/videos/a/b.mp4"
        store.put.assert_awaited_once_with(
            "videos/a/b.mp4", b"movie", "video/mp4", allow_overwrite=False
        )

    @pytest.mark.asyncio
    async def test_existing_key_is_success(self, store, tmp_path):
        """Test an already-stored key resolves to its public URL."""
        store.put.side_effect = BlobAlreadyExistsError(key="cover-arts/a.png", status_code=409)
        path = tmp_path / "1.png"
        path.write_bytes(b"png")

        url = await ObjectStoreUploader(store).upload(path, "cover-arts/a.png")

        assert url == "https://blob.test/cover-arts/a.png"

    @pytest.mark.asyncio
    async def test_other_storage_errors_propagate(self, store, tmp_path):
        """Test non-conflict failures reach the caller."""
        store.put.side_effect = StorageError("quota exceeded", key="k", status_code=403)
        path = tmp_path / "a.mp4"
        path.write_bytes(b"x")

        with pytest.raises(StorageError, match="quota"):
            await ObjectStoreUploader(store).upload(path, "k")

    @pytest.mark.asyncio
    async def test_unreadable_file(self, store, tmp_path):
        """Test a missing local file raises StorageError without calling the store."""
        with pytest.raises(StorageError):
            await ObjectStoreUploader(store).upload(tmp_path / "gone.mp4", "k")

        store.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_overwrite_flag(self, store, tmp_path):
        """Test allow_overwrite is forwarded."""
        path = tmp_path / "c.png"
        path.write_bytes(b"png")

        await ObjectStoreUploader(store).upload(path, "cover-arts/a.png", allow_overwrite=True)

        assert store.put.call_args.kwargs["allow_overwrite"] is True

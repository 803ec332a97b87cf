"""E2E tests for frame capture with a real ffmpeg binary."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_ingest.config.ingest import ThumbnailConfig
from catalog_ingest.infrastructure.ffmpeg import FFmpegWrapper
from catalog_ingest.services.ingest.thumbnail import ThumbnailExtractor
from catalog_ingest.services.ingest.uploader import ObjectStoreUploader, thumbnail_key

JPEG_MAGIC = b"\xff\xd8"


@pytest.mark.e2e
class TestThumbnailExtraction:
    """Capture still frames from synthetic videos."""

    @pytest.fixture
    def extractor(self) -> ThumbnailExtractor:
        return ThumbnailExtractor(FFmpegWrapper())

    @pytest.mark.asyncio
    async def test_extracts_jpeg(self, extractor, video_factory, temp_output_dir):
        video = video_factory("intro.mp4")
        output = temp_output_dir / "thumbs" / "intro.jpg"

        result = await extractor.extract(video, output)

        assert result == output
        assert output.read_bytes().startswith(JPEG_MAGIC)

    @pytest.mark.asyncio
    async def test_short_video_falls_back(self, extractor, video_factory, temp_output_dir):
        """Test a clip shorter than the first seek still yields a frame."""
        video = video_factory("short.mp4", duration=0.8)
        output = temp_output_dir / "short.jpg"

        result = await extractor.extract(video, output)

        assert result == output
        assert output.stat().st_size > 0

    @pytest.mark.asyncio
    async def test_no_seek_attempts(self, video_factory, temp_output_dir):
        """Test an empty timestamp list captures from the start."""
        extractor = ThumbnailExtractor(FFmpegWrapper(), ThumbnailConfig(timestamps=[]))
        video = video_factory()

        assert await extractor.extract(video, temp_output_dir / "first.jpg") is not None

    @pytest.mark.asyncio
    async def test_corrupt_video_returns_none(self, extractor, skip_without_ffmpeg, temp_output_dir):
        video = temp_output_dir / "broken.mp4"
        video.write_bytes(b"not a video at all")
        output = temp_output_dir / "broken.jpg"

        assert await extractor.extract(video, output) is None
        assert not output.exists() or output.stat().st_size == 0

    @pytest.mark.asyncio
    async def test_frame_uploads_as_jpeg(self, extractor, video_factory, temp_output_dir):
        """Test a captured frame goes to the thumbnail key with an image type."""
        store = MagicMock()
        store.put = AsyncMock(return_value="https://blob.test/thumbnails/channel-a/intro.jpg")
        video = video_factory("intro.mp4")
        frame = await extractor.extract(video, temp_output_dir / "intro.jpg")

        url = await ObjectStoreUploader(store).upload(frame, thumbnail_key("channel-a", "intro"))

        assert url.endswith("intro.jpg")
        key, data, content_type = store.put.call_args.args
        assert key == "thumbnails/channel-a/intro.jpg"
        assert data.startswith(JPEG_MAGIC)
        assert content_type == "image/jpeg"


@pytest.mark.e2e
def test_missing_executable_is_unavailable():
    extractor = ThumbnailExtractor(FFmpegWrapper(executable="ffmpeg-does-not-exist"))

    assert extractor.is_available() is False

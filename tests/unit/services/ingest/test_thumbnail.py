"""Unit tests for thumbnail frame extraction."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_ingest.config.ingest import ThumbnailConfig
from catalog_ingest.infrastructure.ffmpeg import FFmpegError
from catalog_ingest.services.ingest.thumbnail import ThumbnailExtractor


@pytest.fixture
def mock_ffmpeg():
    """FFmpeg wrapper whose streams record the seek they were built with."""
    wrapper = MagicMock()
    wrapper.is_available.return_value = True
    wrapper.extract_frame.side_effect = lambda video, output, seek=None, quality=2: {
        "output": output,
        "seek": seek,
    }
    wrapper.run = AsyncMock()
    return wrapper


def writes_frame_when(predicate, content=b"jpeg"):
    """Build a run side effect that writes the output only for matching seeks."""

    async def run(stream):
        if predicate(stream["seek"]):
            stream["output"].write_bytes(content)

    return run


@pytest.mark.unit
class TestThumbnailExtractor:
    """Tests for ThumbnailExtractor."""

    def test_is_available_delegates(self, mock_ffmpeg):
        """Test availability comes from the wrapper."""
        mock_ffmpeg.is_available.return_value = False

        assert ThumbnailExtractor(mock_ffmpeg).is_available() is False

    @pytest.mark.asyncio
    async def test_first_timestamp_succeeds(self, mock_ffmpeg, tmp_path):
        """Test extraction stops at the first successful seek."""
        mock_ffmpeg.run.side_effect = writes_frame_when(lambda seek: True)
        output = tmp_path / "thumbs" / "ep.jpg"

        result = await ThumbnailExtractor(mock_ffmpeg).extract(tmp_path / "ep.mp4", output)

        assert result == output
        assert mock_ffmpeg.run.await_count == 1
        assert mock_ffmpeg.extract_frame.call_args.kwargs["seek"] == "00:00:01"

    @pytest.mark.asyncio
    async def test_falls_back_through_timestamps(self, mock_ffmpeg, tmp_path):
        """Test later timestamps are tried when earlier ones fail."""
        mock_ffmpeg.run.side_effect = writes_frame_when(lambda seek: seek == "00:00:00.5")
        output = tmp_path / "ep.jpg"

        result = await ThumbnailExtractor(mock_ffmpeg).extract(tmp_path / "ep.mp4", output)

        assert result == output
        seeks = [c.kwargs["seek"] for c in mock_ffmpeg.extract_frame.call_args_list]
        assert seeks == ["00:00:01", "00:00:02", "00:00:00.5"]

    @pytest.mark.asyncio
    async def test_no_seek_capture_last(self, mock_ffmpeg, tmp_path):
        """Test a capture without seeking is the final attempt."""
        mock_ffmpeg.run.side_effect = writes_frame_when(lambda seek: seek is None)
        output = tmp_path / "ep.jpg"

        result = await ThumbnailExtractor(mock_ffmpeg).extract(tmp_path / "short.mp4", output)

        assert result == output
        assert mock_ffmpeg.extract_frame.call_args.kwargs["seek"] is None
        assert mock_ffmpeg.run.await_count == 4

    @pytest.mark.asyncio
    async def test_empty_output_is_failure(self, mock_ffmpeg, tmp_path):
        """Test a clean exit with an empty file does not count."""
        mock_ffmpeg.run.side_effect = writes_frame_when(lambda seek: True, content=b"")

        result = await ThumbnailExtractor(mock_ffmpeg).extract(tmp_path / "ep.mp4", tmp_path / "ep.jpg")

        assert result is None
        assert mock_ffmpeg.run.await_count == 4

    @pytest.mark.asyncio
    async def test_all_attempts_fail(self, mock_ffmpeg, tmp_path):
        """Test None when every attempt raises."""
        mock_ffmpeg.run.side_effect = FFmpegError("boom", stderr="invalid data")

        result = await ThumbnailExtractor(mock_ffmpeg).extract(tmp_path / "bad.mp4", tmp_path / "ep.jpg")

        assert result is None
        assert mock_ffmpeg.run.await_count == 4

    @pytest.mark.asyncio
    async def test_stale_output_not_reused(self, mock_ffmpeg, tmp_path):
        """Test a leftover file from an earlier run is not mistaken for success."""
        output = tmp_path / "ep.jpg"
        output.write_bytes(b"stale")
        mock_ffmpeg.run.side_effect = FFmpegError("boom")

        result = await ThumbnailExtractor(mock_ffmpeg).extract(tmp_path / "ep.mp4", output)

        assert result is None

    @pytest.mark.asyncio
    async def test_custom_timestamps_and_quality(self, mock_ffmpeg, tmp_path):
        """Test configured timestamps and quality are passed through."""
        mock_ffmpeg.run.side_effect = writes_frame_when(lambda seek: True)
        config = ThumbnailConfig(timestamps=["5"], quality=4)

        await ThumbnailExtractor(mock_ffmpeg, config).extract(tmp_path / "ep.mp4", tmp_path / "ep.jpg")

        call = mock_ffmpeg.extract_frame.call_args
        assert call.kwargs["seek"] == "5"
        assert call.kwargs["quality"] == 4

"""Thumbnail frame extraction.

Captures one still frame per video. Seek positions are tried in order,
then a capture without seeking; an attempt only counts when the tool exits
cleanly and leaves a non-empty file behind. Failure of every attempt is
not an error: the episode is stored without a thumbnail.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from catalog_ingest.config.ingest import ThumbnailConfig
from catalog_ingest.core.logging import get_logger
from catalog_ingest.infrastructure.ffmpeg import FFmpegError, FFmpegWrapper

logger = get_logger(__name__)


class FrameExtractor(ABC):
    """Abstract still-frame extractor."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying tool can be run."""

    @abstractmethod
    async def extract(self, video_path: Path, output_path: Path) -> Path | None:
        """Capture one frame of ``video_path`` into ``output_path``.

        Returns:
            The output path on success, None if no frame could be captured
        """


class ThumbnailExtractor(FrameExtractor):
    """FFmpeg-backed frame extractor.

    Example:
        >>> extractor = ThumbnailExtractor(FFmpegWrapper())
        >>> thumb = await extractor.extract(Path("ep.mp4"), Path("tmp/ep.jpg"))
    """

    def __init__(
        self,
        ffmpeg_wrapper: FFmpegWrapper,
        config: ThumbnailConfig | None = None,
    ) -> None:
        """Initialize ThumbnailExtractor.

        Args:
            ffmpeg_wrapper: FFmpeg wrapper
            config: Seek timestamps and output quality
        """
        self.ffmpeg = ffmpeg_wrapper
        self.config = config or ThumbnailConfig()

    def is_available(self) -> bool:
        return self.ffmpeg.is_available()

    async def extract(self, video_path: Path, output_path: Path) -> Path | None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        attempts: list[str | None] = [*self.config.timestamps, None]

        for seek in attempts:
            output_path.unlink(missing_ok=True)
            stream = self.ffmpeg.extract_frame(
                video_path, output_path, seek=seek, quality=self.config.quality
            )
            try:
                await self.ffmpeg.run(stream)
            except FFmpegError as e:
                logger.debug("Frame capture attempt failed", video=str(video_path), seek=seek, error=str(e))
                continue

            if output_path.is_file() and output_path.stat().st_size > 0:
                logger.debug("Frame captured", video=str(video_path), seek=seek)
                return output_path

        logger.warning("Thumbnail extraction failed", video=str(video_path), attempts=len(attempts))
        return None


__all__ = ["FrameExtractor", "ThumbnailExtractor"]

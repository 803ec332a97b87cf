"""Type-safe FFmpeg wrapper using ffmpeg-python SDK.

This module provides a typed interface for the FFmpeg operations the
ingest job needs: checking the executable is installed and capturing a
single still frame from a video.

Usage:
    >>> wrapper = FFmpegWrapper()
    >>> stream = wrapper.extract_frame(video_path, output_path, seek="00:00:01")
    >>> await wrapper.run(stream)
"""

import shutil
from pathlib import Path

import ffmpeg

from catalog_ingest.core.logging import get_logger

logger = get_logger(__name__)


class FFmpegError(Exception):
    """FFmpeg operation failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        """Initialize FFmpeg error.

        Args:
            message: Error message
            stderr: FFmpeg stderr output
        """
        self.stderr = stderr
        super().__init__(message)


class FFmpegWrapper:
    """Type-safe wrapper for FFmpeg operations.

    Example:
        >>> wrapper = FFmpegWrapper()
        >>> if wrapper.is_available():
        ...     await wrapper.run(wrapper.extract_frame("in.mp4", "out.jpg"))
    """

    def __init__(
        self,
        executable: str = "ffmpeg",
        overwrite: bool = True,
        quiet: bool = True,
    ) -> None:
        """Initialize FFmpeg wrapper.

        Args:
            executable: FFmpeg executable name or path
            overwrite: Whether to overwrite output files
            quiet: Whether to suppress FFmpeg output
        """
        self.executable = executable
        self.overwrite = overwrite
        self.quiet = quiet

    def is_available(self) -> bool:
        """Check whether the FFmpeg executable can be found on PATH."""
        return shutil.which(self.executable) is not None

    def extract_frame(
        self,
        video_path: Path | str,
        output_path: Path | str,
        seek: str | float | None = None,
        quality: int = 2,
    ) -> ffmpeg.nodes.OutputStream:
        """Extract a single frame from video.

        Args:
            video_path: Path to input video
            output_path: Path to output image
            seek: Position to seek to (``"HH:MM:SS[.ms]"`` or seconds).
                None captures the first decodable frame.
            quality: JPEG quality (2 = high quality)

        Returns:
            FFmpeg output stream
        """
        input_kwargs = {} if seek is None else {"ss": seek}
        stream = ffmpeg.input(str(video_path), **input_kwargs).output(
            str(output_path), vframes=1, **{"q:v": quality}
        )

        if self.overwrite:
            stream = stream.overwrite_output()

        return stream

    async def run(self, stream: ffmpeg.nodes.OutputStream) -> None:
        """Execute an FFmpeg stream.

        Args:
            stream: FFmpeg output stream to execute

        Raises:
            FFmpegError: If execution fails or the executable is missing
        """
        try:
            if self.quiet:
                stream.run(cmd=self.executable, quiet=True, capture_stderr=True)
            else:
                stream.run(cmd=self.executable)
        except ffmpeg.Error as e:
            stderr = e.stderr.decode(errors="replace") if e.stderr else "Unknown error"
            logger.debug("FFmpeg command failed", stderr=stderr[-500:])
            raise FFmpegError(f"FFmpeg execution failed: {stderr}", stderr=stderr) from e
        except FileNotFoundError as e:
            raise FFmpegError(f"FFmpeg executable not found: {self.executable}") from e


__all__ = [
    "FFmpegError",
    "FFmpegWrapper",
]

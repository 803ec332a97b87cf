"""E2E test fixtures and configuration."""

import shutil
import tempfile
from pathlib import Path

import ffmpeg
import pytest

# =============================================================================
# Directory Fixtures
# =============================================================================


@pytest.fixture
def temp_output_dir() -> Path:
    """Create a temporary directory for test outputs."""
    temp_dir = Path(tempfile.mkdtemp(prefix="catalog_ingest_e2e_"))
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def ffmpeg_available() -> bool:
    """Check if FFmpeg is available."""
    return shutil.which("ffmpeg") is not None


@pytest.fixture
def skip_without_ffmpeg(ffmpeg_available: bool) -> None:
    """Skip test if FFmpeg is not available."""
    if not ffmpeg_available:
        pytest.skip("FFmpeg not installed")


# =============================================================================
# Media Factories
# =============================================================================


def make_test_video(path: Path, duration: float = 3.0) -> Path:
    """Render a small synthetic video with ffmpeg's test source.

    Args:
        path: Output path (.mp4)
        duration: Length in seconds

    Returns:
        The written path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    (
        ffmpeg.input(f"testsrc=duration={duration}:size=160x120:rate=10", f="lavfi")
        .output(str(path), vcodec="mpeg4", pix_fmt="yuv420p")
        .overwrite_output()
        .run(quiet=True)
    )
    return path


@pytest.fixture
def video_factory(skip_without_ffmpeg, temp_output_dir):
    """Create synthetic videos under the temp directory."""

    def _make(name: str = "clip.mp4", duration: float = 3.0) -> Path:
        return make_test_video(temp_output_dir / "videos" / name, duration)

    return _make

"""Source video lookup.

Videos live under ``<videos_root>/<index>-<channel-slug>/`` or
``<videos_root>/<channel-slug>/``. Within a directory the candidates are
``<NN>-<episode-slug>.mp4``, ``<NN>-<episode-slug>.mov`` and finally the
legacy file name from the spreadsheet. The first existing file wins,
directories before filenames.
"""

from pathlib import Path

from catalog_ingest.core.logging import get_logger

logger = get_logger(__name__)

VIDEO_EXTENSIONS = (".mp4", ".mov")


class AssetLocator:
    """Resolve an episode row to a video file on disk.

    Example:
        >>> locator = AssetLocator(Path("vids/videos"))
        >>> path = locator.locate(1, "channel-a", "1", "intro", "Intro.mp4")
    """

    def __init__(self, videos_root: Path) -> None:
        """Initialize AssetLocator.

        Args:
            videos_root: Directory of per-channel video folders
        """
        self.videos_root = videos_root

    def candidate_dirs(self, channel_index: int, channel_slug: str) -> list[Path]:
        return [
            self.videos_root / f"{channel_index}-{channel_slug}",
            self.videos_root / channel_slug,
        ]

    @staticmethod
    def candidate_names(episode_number: str, episode_slug: str, file_name: str) -> list[str]:
        number = episode_number.strip().rjust(2, "0")
        names = [f"{number}-{episode_slug}{ext}" for ext in VIDEO_EXTENSIONS]
        legacy = file_name.strip()
        if legacy:
            names.append(legacy)
        return names

    def locate(
        self,
        channel_index: int,
        channel_slug: str,
        episode_number: str,
        episode_slug: str,
        file_name: str = "",
    ) -> Path | None:
        """Find the source video for an episode.

        Args:
            channel_index: 1-based discovery index of the channel
            channel_slug: Channel slug
            episode_number: Episode number as written in the spreadsheet
            episode_slug: Episode slug
            file_name: Legacy file name column

        Returns:
            Path of the first existing candidate, or None
        """
        names = self.candidate_names(episode_number, episode_slug, file_name)
        for directory in self.candidate_dirs(channel_index, channel_slug):
            for name in names:
                path = directory / name
                if path.is_file():
                    return path

        logger.debug(
            "No video candidate found",
            channel=channel_slug,
            episode=episode_slug,
            candidates=names,
        )
        return None


__all__ = ["AssetLocator", "VIDEO_EXTENSIONS"]

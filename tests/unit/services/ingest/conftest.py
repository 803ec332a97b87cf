"""In-memory collaborators and fixtures for ingest service tests."""

import uuid
from pathlib import Path

import pytest

from catalog_ingest.config.ingest import IngestConfig
from catalog_ingest.core.exceptions import (
    BlobAlreadyExistsError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    StorageError,
)
from catalog_ingest.infrastructure.blob_storage import ObjectStore
from catalog_ingest.services.ingest.catalog import (
    CatalogStore,
    ChannelDraft,
    ChannelRecord,
    EpisodeDraft,
    SectionDraft,
)
from catalog_ingest.services.ingest.locator import AssetLocator
from catalog_ingest.services.ingest.pipeline import IngestPipeline
from catalog_ingest.services.ingest.thumbnail import FrameExtractor
from catalog_ingest.services.ingest.uploader import ObjectStoreUploader
from catalog_ingest.services.ingest.writer import CatalogWriter

PUBLIC_BASE = "https://blob.test"

HEADER = (
    "Channel Name,Channel Slug,Channel Description,Channel Category,"
    "Section Name,Section Slug,Section Order,Episode Number,Episode Title,"
    "Episode Slug,Episode Description,File Name,Required Tier Level,"
    "Is First Episode,Season Number,Tags"
)


class FakeCatalogStore(CatalogStore):
    """Dictionary-backed catalog."""

    def __init__(self, admin_id: uuid.UUID | None = None) -> None:
        self.admin_id = admin_id if admin_id is not None else uuid.uuid4()
        self.channels: dict[str, dict] = {}
        self.sections: dict[tuple[uuid.UUID, str], dict] = {}
        self.episodes: dict[str, EpisodeDraft] = {}
        self.video_counts: dict[uuid.UUID, int] = {}
        self.fail_channels: set[str] = set()
        self.fail_episodes: set[str] = set()

    async def get_admin_user_id(self, roles: list[str]) -> uuid.UUID | None:
        return self.admin_id

    async def find_channel(self, slug: str) -> ChannelRecord | None:
        row = self.channels.get(slug)
        if row is None:
            return None
        return ChannelRecord(id=row["id"], slug=slug, cover_image=row["cover_image"])

    async def create_channel(self, draft: ChannelDraft) -> uuid.UUID:
        if draft.slug in self.fail_channels:
            raise RuntimeError(f"insert failed for {draft.slug}")
        if draft.slug in self.channels:
            raise RecordAlreadyExistsError("Channel", "slug", draft.slug)
        channel_id = uuid.uuid4()
        self.channels[draft.slug] = {
            "id": channel_id,
            "draft": draft,
            "cover_image": draft.cover_image,
        }
        return channel_id

    async def find_section(self, channel_id: uuid.UUID, slug: str) -> uuid.UUID | None:
        row = self.sections.get((channel_id, slug))
        return row["id"] if row else None

    async def create_section(self, draft: SectionDraft) -> uuid.UUID:
        section_id = uuid.uuid4()
        self.sections[(draft.channel_id, draft.slug)] = {"id": section_id, "draft": draft}
        return section_id

    async def find_episode(self, slug: str) -> uuid.UUID | None:
        return uuid.uuid4() if slug in self.episodes else None

    async def create_episode(self, draft: EpisodeDraft) -> uuid.UUID:
        if draft.slug in self.fail_episodes:
            raise RuntimeError(f"insert failed for {draft.slug}")
        if draft.slug in self.episodes:
            raise RecordAlreadyExistsError("Episode", "slug", draft.slug)
        self.episodes[draft.slug] = draft
        return uuid.uuid4()

    async def count_episodes(self, channel_id: uuid.UUID) -> int:
        return sum(1 for e in self.episodes.values() if e.channel_id == channel_id)

    async def update_video_count(self, channel_id: uuid.UUID, count: int) -> None:
        self.video_counts[channel_id] = count

    async def update_channel_cover(self, slug: str, cover_image: str) -> uuid.UUID:
        row = self.channels.get(slug)
        if row is None:
            raise RecordNotFoundError("Channel", slug)
        row["cover_image"] = cover_image
        return row["id"]

    def channel_id(self, slug: str) -> uuid.UUID:
        return self.channels[slug]["id"]


class FakeObjectStore(ObjectStore):
    """Object store that keeps bytes in memory and rejects duplicate keys."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.puts: list[str] = []
        self.fail_keys: set[str] = set()

    async def put(
        self,
        key: str,
        data: bytes,
        content_type: str,
        allow_overwrite: bool = False,
    ) -> str:
        self.puts.append(key)
        if key in self.fail_keys:
            raise StorageError("upload failed", key=key, status_code=500)
        if key in self.objects and not allow_overwrite:
            raise BlobAlreadyExistsError(key=key, status_code=409)
        self.objects[key] = (data, content_type)
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return f"{PUBLIC_BASE}/{key}"


class FakeFrameExtractor(FrameExtractor):
    """Frame extractor that writes a small file, or fails on request."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.fail_videos: set[str] = set()
        self.calls: list[Path] = []

    def is_available(self) -> bool:
        return self.available

    async def extract(self, video_path: Path, output_path: Path) -> Path | None:
        self.calls.append(video_path)
        if video_path.name in self.fail_videos:
            return None
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(b"\xff\xd8jpeg")
        return output_path


def write_csv(path: Path, rows: list[str]) -> Path:
    """Write a spreadsheet with the standard header."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join([HEADER, *rows]) + "\n", encoding="utf-8")
    return path


def touch(path: Path, content: bytes = b"data") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture
def ingest_config(tmp_path: Path) -> IngestConfig:
    """Configuration rooted in a temporary asset layout."""
    return IngestConfig(
        csv_path=tmp_path / "episodes.csv",
        assets_root=tmp_path / "vids",
        scratch_dir=tmp_path / "scratch",
    )


@pytest.fixture
def catalog_store() -> FakeCatalogStore:
    return FakeCatalogStore()


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def frame_extractor() -> FakeFrameExtractor:
    return FakeFrameExtractor()


@pytest.fixture
def writer(
    ingest_config: IngestConfig,
    catalog_store: FakeCatalogStore,
    object_store: FakeObjectStore,
    frame_extractor: FakeFrameExtractor,
) -> CatalogWriter:
    return CatalogWriter(
        store=catalog_store,
        uploader=ObjectStoreUploader(object_store),
        extractor=frame_extractor,
        locator=AssetLocator(ingest_config.videos_path),
        config=ingest_config,
    )


@pytest.fixture
def pipeline(
    writer: CatalogWriter,
    ingest_config: IngestConfig,
    catalog_store: FakeCatalogStore,
    frame_extractor: FakeFrameExtractor,
) -> IngestPipeline:
    return IngestPipeline(
        writer=writer,
        store=catalog_store,
        extractor=frame_extractor,
        config=ingest_config,
    )


@pytest.fixture
def make_csv():
    """Factory writing a spreadsheet with the standard header."""
    return write_csv


@pytest.fixture
def make_file():
    """Factory creating a file with parent directories."""
    return touch

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from mediapool.db.db_init import build_session_factory
from mediapool.infrastructure.cdn import ServerCdn
from mediapool.infrastructure.media_storage import InMemoryFilesystem
from mediapool.providers import FileProvider, ImageProvider, Pool
from mediapool.repositories.media_repository import MediaRepository

CDN_BASE_URL = "https://cdn.mediapool.test"
FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class RecordingThumbnail:
    """Thumbnail generator remembering every call."""

    def __init__(self) -> None:
        self.generated: list[tuple[str, int | None]] = []
        self.deleted: list[tuple[str, int | None]] = []

    def generate(self, provider, media) -> None:
        self.generated.append((provider.name, media.id))

    def delete(self, provider, media) -> None:
        self.deleted.append((provider.name, media.id))


@pytest.fixture
def filesystem() -> InMemoryFilesystem:
    return InMemoryFilesystem()


@pytest.fixture
def cdn() -> ServerCdn:
    return ServerCdn(base_url=CDN_BASE_URL)


@pytest.fixture
def thumbnail() -> RecordingThumbnail:
    return RecordingThumbnail()


@pytest.fixture
def file_provider(filesystem, cdn, thumbnail) -> FileProvider:
    return FileProvider(
        "file",
        filesystem=filesystem,
        cdn=cdn,
        thumbnail=thumbnail,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def image_provider(filesystem, cdn, thumbnail) -> ImageProvider:
    return ImageProvider(
        "image",
        filesystem=filesystem,
        cdn=cdn,
        thumbnail=thumbnail,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def pool(file_provider, image_provider) -> Pool:
    pool = Pool()
    pool.add_provider("file", file_provider)
    pool.add_provider("image", image_provider)
    pool.add_context("default", ["file", "image"], ["small", "big"])
    return pool


@pytest.fixture
def media_repo(pool) -> MediaRepository:
    return MediaRepository(build_session_factory("sqlite:///:memory:"), pool)


@pytest.fixture
def ten_byte_file(tmp_path: Path) -> Path:
    path = tmp_path / "report.pdf"
    path.write_bytes(b"0123456789")
    return path

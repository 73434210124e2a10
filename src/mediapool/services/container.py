"""Service composition helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..config import AppConfig
from ..db.db_init import build_session_factory
from ..infrastructure.cdn import CDN, ServerCdn
from ..infrastructure.media_storage import Filesystem, InMemoryFilesystem, LocalFilesystem
from ..media.thumbnails import FormatThumbnail, NoopThumbnail, ThumbnailGenerator
from ..providers.file import FileProvider
from ..providers.image import ImageProvider
from ..providers.path_generator import DefaultPathGenerator
from ..providers.pool import Pool
from ..repositories.media_repository import MediaRepository


@dataclass(slots=True)
class Container:
    """Objects built once at startup and shared by request handlers."""

    config: AppConfig
    pool: Pool
    filesystem: Filesystem
    media_repo: MediaRepository


def _coerce_app_config(config: Mapping[str, Any] | AppConfig | None) -> AppConfig:
    if isinstance(config, AppConfig):
        return config
    if isinstance(config, Mapping):
        return AppConfig(**dict(config))
    return AppConfig()


def build_filesystem(config: AppConfig) -> Filesystem:
    """Return the storage adapter selected by ``config.storage_backend``."""

    if config.storage_backend == "memory":
        return InMemoryFilesystem()
    config.media_root.mkdir(parents=True, exist_ok=True)
    return LocalFilesystem(root=config.media_root)


def build_pool(
    config: AppConfig,
    *,
    filesystem: Filesystem,
    cdn: CDN | None = None,
    thumbnail: ThumbnailGenerator | None = None,
) -> Pool:
    """Register the ``file`` and ``image`` providers and configured contexts."""

    pool = Pool()
    cdn = cdn or ServerCdn(base_url=config.cdn_base_url)
    if thumbnail is None:
        thumbnail = (
            FormatThumbnail(format_lookup=pool.get_format_names_by_context)
            if config.thumbnails_enabled
            else NoopThumbnail()
        )
    path_generator = DefaultPathGenerator(
        first_level=config.path_first_level,
        second_level=config.path_second_level,
    )
    shared: dict[str, Any] = {
        "filesystem": filesystem,
        "cdn": cdn,
        "thumbnail": thumbnail,
        "path_generator": path_generator,
        "delete_files_on_remove": config.delete_files_on_remove,
    }

    pool.add_provider("file", FileProvider("file", **shared))
    pool.add_provider(
        "image",
        ImageProvider("image", allowed_extensions=config.image_allowed_extensions, **shared),
    )

    for name, context in config.contexts.items():
        pool.add_context(name, context.providers, context.formats)

    return pool


def build_container(config: Mapping[str, Any] | AppConfig | None = None) -> Container:
    """Assemble the pool, storage and repository for ``config``."""

    app_config = _coerce_app_config(config)
    filesystem = build_filesystem(app_config)
    pool = build_pool(app_config, filesystem=filesystem)
    session_factory = build_session_factory(app_config.database_url)
    return Container(
        config=app_config,
        pool=pool,
        filesystem=filesystem,
        media_repo=MediaRepository(session_factory, pool),
    )

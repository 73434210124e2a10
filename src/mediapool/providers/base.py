"""Base interface for media providers.

A provider is a stateless strategy bound to one media kind. The host
persistence layer drives it through six hooks, always via the
:class:`~mediapool.providers.pool.Pool`:

* create: ``pre_persist`` -> (row inserted, id assigned) -> ``post_persist``
* update: ``pre_update`` -> (row updated) -> ``post_update``
* delete: ``pre_remove`` -> (row deleted) -> ``post_remove``

Implementations must keep ``provider_reference`` stable once assigned; an
update overwrites the bytes stored under the same key.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from ..domain.models import FormField, Media
from ..infrastructure.cdn import CDN
from ..infrastructure.media_storage import Filesystem, StoredFile
from ..media.thumbnails import NoopThumbnail, ThumbnailGenerator
from .path_generator import DefaultPathGenerator

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _default_clock() -> datetime:
    return datetime.now(timezone.utc)


class MediaProvider(ABC):
    """Lifecycle contract shared by every provider registered in the pool."""

    def __init__(
        self,
        name: str,
        *,
        filesystem: Filesystem,
        cdn: CDN,
        thumbnail: ThumbnailGenerator | None = None,
        path_generator: DefaultPathGenerator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.name = name
        self.filesystem = filesystem
        self.cdn = cdn
        self.thumbnail = thumbnail or NoopThumbnail()
        self.path_generator = path_generator or DefaultPathGenerator()
        self._clock = clock or _default_clock

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def now(self) -> datetime:
        return self._clock()

    def generate_path(self, media: Media) -> str:
        """Canonical directory of ``media``; pure, no storage access."""

        return self.path_generator.generate_path(media)

    def generate_thumbnails(self, media: Media) -> None:
        self.thumbnail.generate(self, media)

    def remove_thumbnails(self, media: Media) -> None:
        self.thumbnail.delete(self, media)

    @abstractmethod
    def get_reference_image(self, media: Media) -> str:
        """Return the storage key holding the original bytes."""

    @abstractmethod
    def get_reference_file(self, media: Media) -> StoredFile:
        """Return a storage handle on :meth:`get_reference_image`."""

    @abstractmethod
    def fix_binary_content(self, media: Media) -> None:
        """Normalize ``media.binary_content`` into a resolved file or ``None``."""

    @abstractmethod
    def pre_persist(self, media: Media) -> None: ...

    @abstractmethod
    def post_persist(self, media: Media) -> None: ...

    @abstractmethod
    def pre_update(self, media: Media) -> None: ...

    @abstractmethod
    def post_update(self, media: Media) -> None: ...

    @abstractmethod
    def pre_remove(self, media: Media) -> None: ...

    @abstractmethod
    def post_remove(self, media: Media) -> None: ...

    @abstractmethod
    def generate_public_url(self, media: Media, format: str) -> str: ...

    @abstractmethod
    def generate_private_url(self, media: Media, format: str) -> str | bool:
        """Return a storage key for ``format`` or ``False`` when unsupported."""

    @abstractmethod
    def get_helper_properties(
        self, media: Media, format: str, options: Mapping[str, Any] | None = None
    ) -> dict[str, Any]: ...

    @abstractmethod
    def build_create_form(self) -> list[FormField]: ...

    @abstractmethod
    def build_edit_form(self) -> list[FormField]: ...

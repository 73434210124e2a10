"""Derived representation generators invoked after media bytes are stored."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol, Sequence

from ..domain.models import DEFAULT_CONTEXT, Media

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..providers.base import MediaProvider

logger = logging.getLogger(__name__)

FormatLookup = Callable[[str], Sequence[str] | None]


class ThumbnailGenerator(Protocol):
    """Builds and removes secondary renditions of a stored media."""

    def generate(self, provider: "MediaProvider", media: Media) -> None: ...

    def delete(self, provider: "MediaProvider", media: Media) -> None: ...


class NoopThumbnail:
    """Generator used when no renditions are configured."""

    def generate(self, provider: "MediaProvider", media: Media) -> None:
        return None

    def delete(self, provider: "MediaProvider", media: Media) -> None:
        return None


@dataclass(slots=True)
class FormatThumbnail:
    """Copy the reference bytes to one key per format of the media's context.

    Resizing is left to an external engine; this generator only guarantees
    that every format key advertised by ``generate_private_url`` exists.
    """

    format_lookup: FormatLookup

    def _format_keys(self, provider: "MediaProvider", media: Media) -> list[str]:
        formats = self.format_lookup(media.context or DEFAULT_CONTEXT) or []
        keys: list[str] = []
        for format_name in formats:
            key = provider.generate_private_url(media, format_name)
            if key:
                keys.append(key)
        return keys

    def generate(self, provider: "MediaProvider", media: Media) -> None:
        keys = self._format_keys(provider, media)
        if not keys:
            return
        content = provider.get_reference_file(media).get_content()
        for key in keys:
            provider.filesystem.get(key, create=True).set_content(content)
        logger.info(
            "media.thumbnail.generated",
            extra={"media_id": media.id, "provider": provider.name, "count": len(keys)},
        )

    def delete(self, provider: "MediaProvider", media: Media) -> None:
        for key in self._format_keys(provider, media):
            provider.filesystem.delete(key)

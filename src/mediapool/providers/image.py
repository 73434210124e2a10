"""Provider for raster images with per-format thumbnails."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..domain.models import Media, ResolvedFile
from ..exceptions import InvalidBinaryContentError
from .file import FileProvider

DEFAULT_IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp")
REFERENCE_FORMAT = "reference"


class ImageProvider(FileProvider):
    """Accept image files only and expose thumbnail keys per format."""

    def __init__(
        self,
        name: str,
        *,
        allowed_extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, **kwargs)
        self.allowed_extensions = frozenset(ext.lower().lstrip(".") for ext in allowed_extensions)

    def validate_binary_content(self, media: Media, resolved: ResolvedFile) -> None:
        if resolved.extension not in self.allowed_extensions:
            raise InvalidBinaryContentError(
                f"Extension '{resolved.extension}' is not allowed for provider '{self.name}'"
            )

    def thumbnail_extension(self, media: Media) -> str:
        # keys follow the immutable reference, not the latest upload
        _, dot, extension = (media.provider_reference or "").rpartition(".")
        if dot and extension:
            return extension
        return media.extension or "jpg"

    def generate_private_url(self, media: Media, format: str) -> str | bool:
        extension = self.thumbnail_extension(media)
        return f"{self.generate_path(media)}/thumb_{media.id}_{format}.{extension}"

    def generate_public_url(self, media: Media, format: str) -> str:
        if format == REFERENCE_FORMAT:
            path = self.get_reference_image(media)
        else:
            path = str(self.generate_private_url(media, format))
        return self.cdn.get_path(path, media.cdn_is_flushable)

    def get_helper_properties(
        self, media: Media, format: str, options: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        properties: dict[str, Any] = {
            "alt": media.name,
            "title": media.name,
            "src": self.generate_public_url(media, format),
            "width": media.width,
            "height": media.height,
        }
        properties.update(options or {})
        return properties

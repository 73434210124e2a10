"""Provider storing arbitrary files as-is."""

from __future__ import annotations

import hashlib
import logging
import os
import uuid
from pathlib import Path
from typing import Any, Mapping

from ..domain.models import FormField, Media, MediaStatus, ResolvedFile
from ..exceptions import InvalidBinaryContentError, MissingMediaNameError
from ..infrastructure.media_storage import StoredFile
from .base import MediaProvider

logger = logging.getLogger(__name__)

FILE_ICON_PATH = "media_bundle/images/files/{format}/file.png"


class FileProvider(MediaProvider):
    """Keep uploaded bytes untouched under ``{path}/{provider_reference}``."""

    def __init__(self, name: str, *, delete_files_on_remove: bool = False, **kwargs: Any) -> None:
        super().__init__(name, **kwargs)
        self.delete_files_on_remove = delete_files_on_remove

    # -- storage keys -------------------------------------------------

    def get_reference_image(self, media: Media) -> str:
        return f"{self.generate_path(media)}/{media.provider_reference or ''}"

    def get_reference_file(self, media: Media) -> StoredFile:
        return self.filesystem.get(self.get_reference_image(media), create=True)

    # -- binary content -----------------------------------------------

    def fix_binary_content(self, media: Media) -> None:
        match media.binary_content:
            case None:
                return
            case ResolvedFile() as resolved:
                pass
            case bytes() | bytearray() as data:
                resolved = ResolvedFile.from_bytes(bytes(data), name=media.name)
            case str() | os.PathLike() as path:
                if not os.path.isfile(path):
                    raise InvalidBinaryContentError(f"The file does not exist: {os.fspath(path)}")
                resolved = ResolvedFile.from_path(path)
            case other:
                raise InvalidBinaryContentError(
                    f"Unsupported binary content type: {type(other).__name__}"
                )

        self.validate_binary_content(media, resolved)
        media.binary_content = resolved

    def validate_binary_content(self, media: Media, resolved: ResolvedFile) -> None:
        """Hook for providers restricting the files they accept."""

    def fix_filename(self, media: Media) -> None:
        resolved = media.binary_content
        if not isinstance(resolved, ResolvedFile):
            raise InvalidBinaryContentError("binary content must be resolved before naming")

        candidate = resolved.client_original_name or resolved.basename or None
        if media.name:
            return
        if not candidate:
            raise MissingMediaNameError("Please define a valid media's name")
        media.name = candidate

    def generate_reference_name(self, media: Media, resolved: ResolvedFile) -> str:
        salt = uuid.uuid4().hex
        digest = hashlib.sha1(f"{media.name}{salt}".encode("utf-8")).hexdigest()
        if resolved.extension:
            return f"{digest}.{resolved.extension}"
        return digest

    def _assign_reference(self, media: Media, resolved: ResolvedFile) -> None:
        if media.provider_reference:
            return
        media.provider_reference = self.generate_reference_name(media, resolved)
        logger.info(
            "media.provider.reference_assigned",
            extra={
                "provider": self.name,
                "media_name": media.name,
                "reference": media.provider_reference,
            },
        )

    def _refresh_metadata(self, media: Media, resolved: ResolvedFile) -> None:
        media.content_type = resolved.mime_type
        media.size = resolved.size
        media.extension = resolved.extension or None

    # -- lifecycle ----------------------------------------------------

    def pre_persist(self, media: Media) -> None:
        self.fix_binary_content(media)

        media.provider_name = self.name
        media.provider_status = MediaStatus.OK

        resolved = media.binary_content
        if not isinstance(resolved, ResolvedFile):
            return

        self.fix_filename(media)
        self._assign_reference(media, resolved)
        self._refresh_metadata(media, resolved)
        now = self.now()
        media.created_at = now
        media.updated_at = now

    def post_persist(self, media: Media) -> None:
        if media.binary_content is None:
            return

        self.set_file_contents(media)
        self.generate_thumbnails(media)

    def pre_update(self, media: Media) -> None:
        self.fix_binary_content(media)

        resolved = media.binary_content
        if not isinstance(resolved, ResolvedFile):
            return

        self.fix_filename(media)
        self._assign_reference(media, resolved)
        self._refresh_metadata(media, resolved)
        media.updated_at = self.now()

    def post_update(self, media: Media) -> None:
        if not isinstance(media.binary_content, ResolvedFile):
            return

        self.fix_binary_content(media)
        self.set_file_contents(media)
        self.generate_thumbnails(media)

        if media.cdn_is_flushable:
            self.cdn.flush_paths([self.get_reference_image(media)])

    def pre_remove(self, media: Media) -> None:
        return None

    def post_remove(self, media: Media) -> None:
        if not self.delete_files_on_remove or not media.provider_reference:
            return
        self.remove_thumbnails(media)
        self.filesystem.delete(self.get_reference_image(media))
        logger.info(
            "media.storage.removed",
            extra={"provider": self.name, "key": self.get_reference_image(media)},
        )

    def set_file_contents(
        self, media: Media, contents: bytes | str | os.PathLike | None = None
    ) -> None:
        """Overwrite the reference file with ``contents``.

        ``contents`` may be raw bytes or a path; by default the resolved
        binary content of ``media`` is used.
        """

        match contents:
            case None:
                resolved = media.binary_content
                if not isinstance(resolved, ResolvedFile):
                    raise InvalidBinaryContentError("media has no resolved binary content to store")
                payload = resolved.read_bytes()
            case bytes() | bytearray():
                payload = bytes(contents)
            case str() | os.PathLike():
                payload = Path(contents).read_bytes()
            case _:
                raise TypeError(f"unsupported contents type: {type(contents).__name__}")

        key = self.get_reference_image(media)
        written = self.filesystem.get(key, create=True).set_content(payload)
        logger.info(
            "media.storage.written",
            extra={"provider": self.name, "media_id": media.id, "key": key, "size": written},
        )

    # -- presentation -------------------------------------------------

    def generate_public_url(self, media: Media, format: str) -> str:
        return self.cdn.get_path(FILE_ICON_PATH.format(format=format), media.cdn_is_flushable)

    def generate_private_url(self, media: Media, format: str) -> str | bool:
        return False

    def get_helper_properties(
        self, media: Media, format: str, options: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        reference = self.get_reference_image(media)
        properties: dict[str, Any] = {
            "title": media.name,
            "thumbnail": reference,
            "file": reference,
        }
        properties.update(options or {})
        return properties

    def build_create_form(self) -> list[FormField]:
        return [FormField("binary_content", "file", required=True)]

    def build_edit_form(self) -> list[FormField]:
        return [
            FormField("name"),
            FormField("enabled"),
            FormField("author_name"),
            FormField("cdn_is_flushable"),
            FormField("description"),
            FormField("copyright"),
            FormField("binary_content", "file"),
        ]

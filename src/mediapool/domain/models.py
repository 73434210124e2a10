"""Domain models for media entities and their binary content.

``Media`` mirrors the record managed by the host persistence layer. Its
``binary_content`` field is transient input: raw ``bytes``, a filesystem path
or an already resolved :class:`ResolvedFile`. Providers normalize it during
the lifecycle hooks and the host clears it once the bytes are stored.
"""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:  # pragma: no cover - typing only
    from fastapi import UploadFile

DEFAULT_MIME_TYPE = "application/octet-stream"
# storage directory and format lookup for media saved without a context
DEFAULT_CONTEXT = "default"


class MediaStatus(int, Enum):
    """Provider outcome markers stored on a media record."""

    OK = 1
    SENDING = 2
    PENDING = 3
    ERROR = 4
    ENCODING = 5


def _guess_mime_type(name: str | None) -> str:
    if not name:
        return DEFAULT_MIME_TYPE
    guessed, _ = mimetypes.guess_type(name)
    return guessed or DEFAULT_MIME_TYPE


def _extension_of(name: str | None) -> str:
    if not name:
        return ""
    return Path(name).suffix.lstrip(".").lower()


@dataclass(slots=True)
class ResolvedFile:
    """Binary content whose metadata is known.

    ``real_path`` points at the bytes on disk; in-memory payloads keep them in
    ``data`` instead. ``client_original_name`` is only set for user uploads.
    """

    basename: str
    extension: str
    mime_type: str
    size: int
    real_path: Path | None = None
    client_original_name: str | None = None
    data: bytes | None = field(default=None, repr=False)

    @classmethod
    def from_path(
        cls, path: str | os.PathLike[str], *, client_original_name: str | None = None
    ) -> "ResolvedFile":
        resolved = Path(path).resolve()
        name = client_original_name or resolved.name
        return cls(
            basename=resolved.name,
            extension=_extension_of(name),
            mime_type=_guess_mime_type(name),
            size=resolved.stat().st_size,
            real_path=resolved,
            client_original_name=client_original_name,
        )

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        *,
        name: str | None = None,
        mime_type: str | None = None,
        client_original_name: str | None = None,
    ) -> "ResolvedFile":
        return cls(
            basename=name or "",
            extension=_extension_of(name),
            mime_type=mime_type or _guess_mime_type(name),
            size=len(data),
            client_original_name=client_original_name,
            data=data,
        )

    @classmethod
    async def from_upload(cls, upload: "UploadFile") -> "ResolvedFile":
        """Read a FastAPI upload into memory, keeping the client filename."""

        data = await upload.read()
        await upload.seek(0)
        return cls.from_bytes(
            data,
            name=upload.filename or None,
            mime_type=upload.content_type or None,
            client_original_name=upload.filename or None,
        )

    def read_bytes(self) -> bytes:
        if self.data is not None:
            return self.data
        if self.real_path is None:
            raise ValueError("resolved file has neither data nor a real path")
        return self.real_path.read_bytes()


BinaryContent: TypeAlias = bytes | str | os.PathLike | ResolvedFile


@dataclass(slots=True)
class Media:
    """Media entity handled by providers through the lifecycle hooks."""

    id: int | None = None
    name: str | None = None
    description: str | None = None
    enabled: bool = True
    provider_name: str | None = None
    provider_status: MediaStatus | None = None
    provider_reference: str | None = None
    context: str | None = None
    content_type: str | None = None
    size: int | None = None
    extension: str | None = None
    width: int | None = None
    height: int | None = None
    author_name: str | None = None
    copyright: str | None = None
    cdn_is_flushable: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    binary_content: BinaryContent | None = field(default=None, repr=False)


@dataclass(slots=True)
class MediaContext:
    """Providers and output formats allowed in a usage context."""

    providers: list[str] = field(default_factory=list)
    formats: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class FormField:
    """Declarative admin form field exposed by providers."""

    name: str
    type: str | None = None
    required: bool = False

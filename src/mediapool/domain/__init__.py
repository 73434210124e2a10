"""Domain entities shared by providers, repositories and the API."""

from .models import (
    DEFAULT_CONTEXT,
    BinaryContent,
    FormField,
    Media,
    MediaContext,
    MediaStatus,
    ResolvedFile,
)

__all__ = [
    "DEFAULT_CONTEXT",
    "BinaryContent",
    "FormField",
    "Media",
    "MediaContext",
    "MediaStatus",
    "ResolvedFile",
]

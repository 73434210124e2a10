"""Deterministic directory scheme for stored media."""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.models import DEFAULT_CONTEXT, Media


@dataclass(slots=True, frozen=True)
class DefaultPathGenerator:
    """Spread media over ``{context}/{first:04d}/{second:02d}`` directories.

    With the defaults every first-level directory holds 100 second-level
    directories of at most 1000 media each.
    """

    first_level: int = 100_000
    second_level: int = 1_000

    def __post_init__(self) -> None:
        if self.first_level < 1 or self.second_level < 1:
            raise ValueError("path levels must be positive")

    def generate_path(self, media: Media) -> str:
        if media.id is None:
            raise ValueError("media must have an id before a path can be generated")
        first = media.id // self.first_level
        second = (media.id - first * self.first_level) // self.second_level
        context = media.context or DEFAULT_CONTEXT
        return f"{context}/{first + 1:04d}/{second + 1:02d}"

"""Helpers for building public media URLs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)


class CDN(Protocol):
    """URL collaborator used by providers to publish media paths."""

    def get_path(self, relative_path: str, flushable: bool = False) -> str: ...

    def flush_paths(self, paths: Iterable[str]) -> None: ...


@dataclass(slots=True)
class ServerCdn:
    """Serve media straight from the web server under ``base_url``."""

    base_url: str

    def get_path(self, relative_path: str, flushable: bool = False) -> str:
        return f"{self.base_url.rstrip('/')}/{relative_path.lstrip('/')}"

    def flush_paths(self, paths: Iterable[str]) -> None:
        # nothing is cached in front of the server
        logger.debug("media.cdn.flush_skipped", extra={"paths": list(paths)})

"""Request dependencies resolving objects stored on ``app.state``."""

from __future__ import annotations

from fastapi import Request

from ..providers.pool import Pool
from ..repositories.media_repository import MediaRepository


def get_pool(request: Request) -> Pool:
    try:
        return request.app.state.pool  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("Pool is not configured") from exc


def get_media_repo(request: Request) -> MediaRepository:
    try:
        return request.app.state.media_repo  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("MediaRepository is not configured") from exc

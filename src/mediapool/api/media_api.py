"""Media CRUD routes driving the provider lifecycle.

Uploaded bytes are handed to the providers as binary content; the routes never
serve stored files themselves.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)

from ..domain.models import Media, ResolvedFile
from ..exceptions import (
    InvalidBinaryContentError,
    MediaNotFoundError,
    MissingMediaNameError,
    ProviderNotFoundError,
)
from ..providers.pool import Pool
from ..repositories.media_repository import MediaRepository
from .dependencies import get_media_repo, get_pool
from .schemas import MediaListResponse, MediaResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/media", tags=["media"])


def _error(status_code: int, reason: str, message: str | None = None) -> HTTPException:
    detail: dict[str, str] = {"status": "error", "failure_reason": reason}
    if message:
        detail["message"] = message
    return HTTPException(status_code=status_code, detail=detail)


def _to_response(pool: Pool, media: Media, format: str) -> MediaResponse:
    provider = pool.get_provider(media.provider_name)
    private_url = provider.generate_private_url(media, format)
    return MediaResponse(
        id=media.id,  # type: ignore[arg-type]
        name=media.name,
        description=media.description,
        enabled=media.enabled,
        provider_name=provider.name,
        provider_status=int(media.provider_status) if media.provider_status else None,
        provider_reference=media.provider_reference,
        context=media.context,
        content_type=media.content_type,
        size=media.size,
        extension=media.extension,
        cdn_is_flushable=media.cdn_is_flushable,
        created_at=media.created_at,
        updated_at=media.updated_at,
        format=format,
        public_url=provider.generate_public_url(media, format),
        private_url=private_url if isinstance(private_url, str) else None,
        helper=provider.get_helper_properties(media, format),
    )


@contextmanager
def _lifecycle_errors() -> Iterator[None]:
    """Map lifecycle failures onto HTTP errors."""
    try:
        yield
    except ProviderNotFoundError as exc:
        raise _error(status.HTTP_400_BAD_REQUEST, "provider_not_found", str(exc)) from None
    except InvalidBinaryContentError as exc:
        raise _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_binary_content", str(exc)
        ) from None
    except MissingMediaNameError as exc:
        raise _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "missing_media_name", str(exc)) from None
    except MediaNotFoundError:
        raise _error(status.HTTP_404_NOT_FOUND, "media_not_found") from None


def _load(media_repo: MediaRepository, media_id: int) -> Media:
    try:
        return media_repo.get(media_id)
    except MediaNotFoundError:
        raise _error(status.HTTP_404_NOT_FOUND, "media_not_found") from None


@router.post("", response_model=MediaResponse, status_code=status.HTTP_201_CREATED)
async def create_media(
    provider: str = Form(...),
    context: str = Form("default"),
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    cdn_is_flushable: bool = Form(False),
    file: UploadFile = File(...),
    pool: Pool = Depends(get_pool),
    media_repo: MediaRepository = Depends(get_media_repo),
) -> MediaResponse:
    """Upload a file and create the media through ``provider``."""
    allowed = pool.get_provider_names_by_context(context)
    if allowed is None:
        raise _error(status.HTTP_400_BAD_REQUEST, "context_not_found")
    if provider not in allowed:
        raise _error(status.HTTP_400_BAD_REQUEST, "provider_not_allowed_in_context")

    media = Media(
        name=name or None,
        description=description,
        context=context,
        provider_name=provider,
        cdn_is_flushable=cdn_is_flushable,
        binary_content=await ResolvedFile.from_upload(file),
    )
    with _lifecycle_errors():
        created = media_repo.create(media)
    logger.info(
        "media.api.created",
        extra={"media_id": created.id, "provider": provider, "context": context},
    )
    return _to_response(pool, created, "reference")


@router.get("", response_model=MediaListResponse)
def list_media(
    context: str = Query(default="default"),
    format: str = Query(default="reference"),
    pool: Pool = Depends(get_pool),
    media_repo: MediaRepository = Depends(get_media_repo),
) -> MediaListResponse:
    items = [_to_response(pool, media, format) for media in media_repo.list_by_context(context)]
    return MediaListResponse(context=context, items=items)


@router.get("/{media_id}", response_model=MediaResponse)
def get_media(
    media_id: int,
    format: str = Query(default="reference"),
    pool: Pool = Depends(get_pool),
    media_repo: MediaRepository = Depends(get_media_repo),
) -> MediaResponse:
    media = _load(media_repo, media_id)
    try:
        return _to_response(pool, media, format)
    except ProviderNotFoundError as exc:
        raise _error(status.HTTP_409_CONFLICT, "provider_not_found", str(exc)) from None


@router.put("/{media_id}", response_model=MediaResponse)
async def update_media(
    media_id: int,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    enabled: Optional[bool] = Form(None),
    cdn_is_flushable: Optional[bool] = Form(None),
    file: Optional[UploadFile] = File(None),
    pool: Pool = Depends(get_pool),
    media_repo: MediaRepository = Depends(get_media_repo),
) -> MediaResponse:
    """Update metadata and optionally replace the stored bytes."""
    media = _load(media_repo, media_id)
    if name:
        media.name = name
    if description is not None:
        media.description = description
    if enabled is not None:
        media.enabled = enabled
    if cdn_is_flushable is not None:
        media.cdn_is_flushable = cdn_is_flushable
    if file is not None:
        media.binary_content = await ResolvedFile.from_upload(file)

    with _lifecycle_errors():
        updated = media_repo.update(media)
    return _to_response(pool, updated, "reference")


@router.delete("/{media_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_media(
    media_id: int,
    media_repo: MediaRepository = Depends(get_media_repo),
) -> Response:
    with _lifecycle_errors():
        media_repo.delete(media_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

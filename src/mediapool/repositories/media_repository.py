"""Persistence layer for media records.

The repository is the host of the provider lifecycle: it fires the pool
hooks around its own insert/update/delete statements and only commits once
every hook succeeded. A failing hook leaves the session uncommitted, so the
surrounding transaction is rolled back when the session closes.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.db_models import MediaModel
from ..domain.models import Media, MediaStatus
from ..exceptions import MediaNotFoundError, handle_sqlalchemy_errors
from ..providers.pool import Pool

logger = structlog.get_logger(__name__)

_PERSISTED_FIELDS = (
    "name",
    "description",
    "enabled",
    "provider_name",
    "provider_reference",
    "context",
    "content_type",
    "size",
    "extension",
    "width",
    "height",
    "author_name",
    "copyright",
    "cdn_is_flushable",
    "created_at",
    "updated_at",
)


class MediaRepository:
    """Store media metadata and drive provider lifecycle hooks."""

    def __init__(self, session_factory: Callable[[], Session], pool: Pool) -> None:
        self._session_factory = session_factory
        self._pool = pool

    def create(self, media: Media) -> Media:
        """Insert ``media``; ``media.provider_name`` selects the provider."""
        with self._session_factory() as session, handle_sqlalchemy_errors(entity="media"):
            self._pool.pre_persist(media)
            model = MediaModel()
            self._apply(model, media)
            session.add(model)
            session.flush()
            media.id = model.id
            self._pool.post_persist(media)
            session.commit()

        media.binary_content = None
        logger.info(
            "media.created",
            media_id=media.id,
            provider=media.provider_name,
            reference=media.provider_reference,
        )
        return media

    def update(self, media: Media) -> Media:
        """Persist changed fields of an existing media."""
        if media.id is None:
            raise MediaNotFoundError("media has no id, create it first")

        with self._session_factory() as session, handle_sqlalchemy_errors(entity="media"):
            model = self._load(session, media.id)
            # provider and reference are owned by the stored record
            media.provider_name = model.provider_name
            if model.provider_reference:
                media.provider_reference = model.provider_reference

            self._pool.pre_update(media)
            self._apply(model, media)
            session.flush()
            self._pool.post_update(media)
            session.commit()

        media.binary_content = None
        logger.info("media.updated", media_id=media.id, provider=media.provider_name)
        return media

    def delete(self, media_id: int) -> Media:
        """Remove the record; stored bytes are left to the provider."""
        with self._session_factory() as session, handle_sqlalchemy_errors(entity="media"):
            model = self._load(session, media_id)
            media = self._to_domain(model)
            self._pool.pre_remove(media)
            session.delete(model)
            session.commit()

        self._pool.post_remove(media)
        logger.info("media.deleted", media_id=media_id, provider=media.provider_name)
        return media

    def get(self, media_id: int) -> Media:
        with self._session_factory() as session:
            return self._to_domain(self._load(session, media_id))

    def list_by_context(self, context: str) -> list[Media]:
        with self._session_factory() as session:
            rows = session.scalars(
                select(MediaModel).where(MediaModel.context == context).order_by(MediaModel.id)
            ).all()
            return [self._to_domain(row) for row in rows]

    @staticmethod
    def _load(session: Session, media_id: int) -> MediaModel:
        model = session.get(MediaModel, media_id)
        if model is None:
            raise MediaNotFoundError(f"media '{media_id}' not found")
        return model

    @staticmethod
    def _apply(model: MediaModel, media: Media) -> None:
        for name in _PERSISTED_FIELDS:
            setattr(model, name, getattr(media, name))
        model.provider_status = int(media.provider_status) if media.provider_status else None

    @staticmethod
    def _to_domain(model: MediaModel) -> Media:
        media = Media(id=model.id)
        for name in _PERSISTED_FIELDS:
            setattr(media, name, getattr(model, name))
        media.provider_status = (
            MediaStatus(model.provider_status) if model.provider_status is not None else None
        )
        return media

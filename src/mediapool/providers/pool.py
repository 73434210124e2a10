"""Registry of media providers and usage contexts.

The pool is assembled once during application startup (see
:func:`mediapool.services.container.build_pool`) and only read afterwards.
Lifecycle hooks fired by the persistence layer are forwarded to the provider
named by ``media.provider_name``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Sequence

from ..domain.models import Media, MediaContext
from ..exceptions import ProviderNotFoundError
from .base import MediaProvider

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Pool:
    """Name -> provider lookup plus context -> providers/formats grouping."""

    providers: Dict[str, MediaProvider] = field(default_factory=dict)
    contexts: Dict[str, MediaContext] = field(default_factory=dict)

    # -- providers ----------------------------------------------------

    def add_provider(self, name: str, provider: MediaProvider) -> None:
        """Register ``provider`` under ``name``, replacing any previous one."""

        if not name:
            raise ValueError("provider name must not be empty")
        self.providers[name] = provider

    def get_provider(self, name: str | None) -> MediaProvider:
        try:
            return self.providers[name]  # type: ignore[index]
        except KeyError:
            raise ProviderNotFoundError(name) from None

    def set_providers(self, providers: Mapping[str, MediaProvider]) -> None:
        self.providers = {}
        for name, provider in providers.items():
            self.add_provider(name, provider)

    def get_providers(self) -> Mapping[str, MediaProvider]:
        return dict(self.providers)

    def get_provider_list(self) -> dict[str, str]:
        """Choices for a host UI: every registered name mapped to itself."""

        return {name: name for name in self.providers}

    # -- contexts -----------------------------------------------------

    def add_context(
        self,
        name: str,
        providers: Sequence[str] = (),
        formats: Sequence[str] = (),
    ) -> None:
        """Create ``name`` if needed and overwrite its providers and formats."""

        context = self.contexts.setdefault(name, MediaContext())
        context.providers = list(providers)
        context.formats = list(formats)

    def has_context(self, name: str) -> bool:
        return name in self.contexts

    def get_context(self, name: str) -> MediaContext | None:
        return self.contexts.get(name)

    def get_contexts(self) -> Mapping[str, MediaContext]:
        return dict(self.contexts)

    def get_provider_names_by_context(self, name: str) -> list[str] | None:
        context = self.get_context(name)
        if context is None:
            return None
        return list(context.providers)

    def get_format_names_by_context(self, name: str) -> list[str] | None:
        context = self.get_context(name)
        if context is None:
            return None
        return list(context.formats)

    def get_providers_by_context(self, name: str) -> list[MediaProvider]:
        """Resolve the providers of ``name``; unknown contexts yield ``[]``."""

        names = self.get_provider_names_by_context(name)
        if names is None:
            return []
        return [self.get_provider(provider_name) for provider_name in names]

    # -- lifecycle forwarding -----------------------------------------

    def _dispatch(self, hook: str, media: Media) -> MediaProvider:
        provider = self.get_provider(media.provider_name)
        logger.debug(
            "media.pool.dispatch",
            extra={"hook": hook, "provider": media.provider_name, "media_id": media.id},
        )
        return provider

    def pre_persist(self, media: Media) -> None:
        self._dispatch("pre_persist", media).pre_persist(media)

    def post_persist(self, media: Media) -> None:
        self._dispatch("post_persist", media).post_persist(media)

    def pre_update(self, media: Media) -> None:
        self._dispatch("pre_update", media).pre_update(media)

    def post_update(self, media: Media) -> None:
        self._dispatch("post_update", media).post_update(media)

    def pre_remove(self, media: Media) -> None:
        self._dispatch("pre_remove", media).pre_remove(media)

    def post_remove(self, media: Media) -> None:
        self._dispatch("post_remove", media).post_remove(media)

"""Application configuration for mediapool.

Values are read from ``MEDIAPOOL_*`` environment variables. Contexts are
given as JSON, e.g.::

    MEDIAPOOL_CONTEXTS='{"gallery": {"providers": ["image"], "formats": ["small"]}}'
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_media_root() -> Path:
    return Path("./var/media")


class ContextSettings(BaseModel):
    providers: list[str] = Field(default_factory=list)
    formats: list[str] = Field(default_factory=list)


def _default_contexts() -> Dict[str, ContextSettings]:
    return {
        "default": ContextSettings(providers=["file", "image"], formats=["small", "big"]),
    }


class AppConfig(BaseSettings):
    """Pydantic settings container for the service layer."""

    model_config = SettingsConfigDict(env_prefix="MEDIAPOOL_")

    database_url: str = Field(
        default="sqlite:///mediapool.db",
        description="SQLAlchemy URL of the media metadata database.",
    )
    media_root: Path = Field(
        default_factory=_default_media_root,
        description="Filesystem root used by the local storage backend.",
    )
    storage_backend: Literal["local", "memory"] = Field(
        default="local",
        description="Storage port adapter holding media bytes.",
    )
    cdn_base_url: str = Field(
        default="/uploads/media",
        description="Prefix prepended to storage keys in public URLs.",
    )
    path_first_level: int = Field(default=100_000, ge=1)
    path_second_level: int = Field(default=1_000, ge=1)
    image_allowed_extensions: list[str] = Field(
        default_factory=lambda: ["jpg", "jpeg", "png", "gif", "webp"],
    )
    thumbnails_enabled: bool = Field(
        default=True,
        description="Copy reference bytes to per-format thumbnail keys.",
    )
    delete_files_on_remove: bool = Field(
        default=False,
        description="Remove stored bytes when a media is deleted.",
    )
    contexts: Dict[str, ContextSettings] = Field(default_factory=_default_contexts)


def load_config() -> AppConfig:
    """Load configuration from the environment."""

    return AppConfig()


__all__ = ["AppConfig", "ContextSettings", "load_config"]

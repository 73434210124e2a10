"""FastAPI application entry point."""

from __future__ import annotations

from fastapi import FastAPI

from .api import media_router, providers_router
from .config import AppConfig, load_config
from .logging import configure_logging
from .services.container import Container, build_container


def include_routers(app: FastAPI, container: Container) -> None:
    """Mount routers and attach shared services to ``app.state``."""
    app.state.config = container.config
    app.state.pool = container.pool
    app.state.filesystem = container.filesystem
    app.state.media_repo = container.media_repo

    app.include_router(providers_router)
    app.include_router(media_router)


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    built = container or build_container(config or load_config())
    app = FastAPI(title="mediapool")
    include_routers(app, built)
    return app

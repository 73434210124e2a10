"""HTTP routers exposing media lifecycle operations."""

from .media_api import router as media_router
from .providers_api import router as providers_router

__all__ = ["media_router", "providers_router"]

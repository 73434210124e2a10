"""Database helpers for media metadata."""

from .db_init import build_session_factory, init_db
from .db_models import Base, MediaModel

__all__ = ["Base", "MediaModel", "build_session_factory", "init_db"]

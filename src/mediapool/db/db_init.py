"""Database initialization helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .db_models import Base


def init_db(engine: Engine) -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(engine)


def build_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create an engine for ``database_url`` and return a bound session factory."""
    options: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url == "sqlite://":
            # in-memory databases must share one connection across threads
            options["poolclass"] = StaticPool
    engine = create_engine(database_url, future=True, **options)
    init_db(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)

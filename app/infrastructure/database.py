"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)

_SQLITE_BUSY_TIMEOUT_SECONDS = 30


def _engine_options(database_url: str) -> dict[str, Any]:
    """Return backend specific keyword arguments for :func:`create_engine`."""

    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True}

    # Route handlers and notification writers share connections across worker threads.
    return {
        "connect_args": {
            "check_same_thread": False,
            "timeout": _SQLITE_BUSY_TIMEOUT_SECONDS,
        }
    }


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url`` with the project defaults."""

    logger.debug("Creating database engine for %s", make_url(database_url).get_backend_name())
    return create_engine(database_url, **_engine_options(database_url))


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``bind``."""

    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


def _build_sqlalchemy_database_url(settings: Settings) -> str:
    return settings.database_url.strip()


database_url = _build_sqlalchemy_database_url(settings)
engine = build_engine(database_url)
SessionLocal = build_session_factory(engine)


def initialize_database(bind: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=bind or engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

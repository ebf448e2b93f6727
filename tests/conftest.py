"""Shared fixtures for the test-suite."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "social_notifications_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.application.use_cases.notifications import NotificationFanout  # noqa: E402
from app.application.use_cases.users import create_user  # noqa: E402
from app.domain.entities import Actor  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.notifications import (  # noqa: E402
    NotificationDispatcher,
    PresenceRegistry,
)


class FakeConnection:
    """Websocket stand-in that records every JSON message pushed to it."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[Any] = []

    async def send_json(self, data: Any, mode: str = "text") -> None:
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(data)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def registry() -> PresenceRegistry:
    return PresenceRegistry()


@pytest.fixture
def dispatcher(registry: PresenceRegistry) -> NotificationDispatcher:
    return NotificationDispatcher(registry)


@pytest.fixture
def fanout(dispatcher: NotificationDispatcher) -> NotificationFanout:
    return NotificationFanout(dispatcher, SessionLocal)


@pytest.fixture
def make_actor(session):
    """Return a factory that registers a user and returns its :class:`Actor`."""

    def _make(username: str, *, role: str = "user") -> Actor:
        user = create_user(
            session,
            username=username,
            email=f"{username}@example.com",
            password="secret123",
            role=role,
        )
        return Actor.from_user(user)

    return _make

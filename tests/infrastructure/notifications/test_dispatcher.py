"""Tests for realtime delivery through :class:`NotificationDispatcher`."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.domain.entities import NotificationEvent, NotificationKind
from app.infrastructure.notifications import (
    NotificationDispatcher,
    PresenceRegistry,
    serialize_event,
)

from conftest import FakeConnection

PAYLOAD = {"kind": "like", "message": "alice liked your post", "post_id": 7}


@pytest.mark.anyio
async def test_send_to_online_user_wraps_payload(
    registry: PresenceRegistry, dispatcher: NotificationDispatcher
) -> None:
    connection = FakeConnection()
    registry.register(1, connection)

    assert await dispatcher.send_to_user(1, PAYLOAD) is True
    assert connection.sent == [{"type": "notification", "data": PAYLOAD}]


@pytest.mark.anyio
async def test_send_to_offline_user_reports_not_delivered(
    dispatcher: NotificationDispatcher,
) -> None:
    assert await dispatcher.send_to_user(99, PAYLOAD) is False


@pytest.mark.anyio
async def test_failed_push_drops_connection(
    registry: PresenceRegistry, dispatcher: NotificationDispatcher
) -> None:
    broken = FakeConnection(fail=True)
    registry.register(1, broken)

    assert await dispatcher.send_to_user(1, PAYLOAD) is False
    assert registry.lookup(1) is None


@pytest.mark.anyio
async def test_send_to_users_isolates_failures(
    registry: PresenceRegistry, dispatcher: NotificationDispatcher
) -> None:
    healthy = FakeConnection()
    registry.register(1, healthy)
    registry.register(2, FakeConnection(fail=True))

    outcomes = await dispatcher.send_to_users([1, 2, 3, 1], PAYLOAD)

    assert outcomes == {1: True, 2: False, 3: False}
    assert len(healthy.sent) == 1


@pytest.mark.anyio
async def test_broadcast_counts_successful_pushes(
    registry: PresenceRegistry, dispatcher: NotificationDispatcher
) -> None:
    connections = [FakeConnection(), FakeConnection(), FakeConnection(fail=True)]
    for user_id, connection in enumerate(connections, start=1):
        registry.register(user_id, connection)

    delivered = await dispatcher.broadcast({"message": "maintenance at noon"})

    assert delivered == 2
    assert connections[0].sent[0]["data"]["message"] == "maintenance at noon"


@pytest.mark.anyio
async def test_dispatch_schedules_without_waiting(
    registry: PresenceRegistry, dispatcher: NotificationDispatcher
) -> None:
    connection = FakeConnection()
    registry.register(1, connection)

    scheduled = dispatcher.dispatch([1, 2], PAYLOAD)

    assert scheduled == {1: True, 2: False}
    await dispatcher.drain()
    assert connection.sent == [{"type": "notification", "data": PAYLOAD}]


def test_serialize_event_uses_wire_fields() -> None:
    created_at = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    event = NotificationEvent(
        kind=NotificationKind.COMMENT,
        message="bob commented on your post",
        recipients=frozenset({1}),
        sender_id=2,
        post_id=10,
        comment_id=3,
        created_at=created_at,
    )

    assert serialize_event(event) == {
        "kind": "comment",
        "message": "bob commented on your post",
        "post_id": 10,
        "comment_id": 3,
        "sender_id": 2,
        "created_at": created_at.isoformat(),
        "read": False,
    }

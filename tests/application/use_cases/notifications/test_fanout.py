"""Tests for publishing events to live connections and the inbox."""

from __future__ import annotations

import pytest

from app.application.use_cases.notifications import NotificationFanout
from app.application.use_cases.notifications import fanout as fanout_module
from app.domain.entities import NotificationEvent, NotificationKind
from app.infrastructure.notifications import NotificationDispatcher, PresenceRegistry
from app.infrastructure.repositories import NotificationRepository

from conftest import FakeConnection


def _event(recipients: set[int], *, sender_id: int = 1) -> NotificationEvent:
    return NotificationEvent(
        kind=NotificationKind.POST_EDIT,
        message="alice updated their post",
        recipients=frozenset(recipients),
        sender_id=sender_id,
        post_id=5,
    )


@pytest.mark.anyio
async def test_publish_pushes_online_and_stores_everyone(
    session, make_actor, registry: PresenceRegistry, dispatcher: NotificationDispatcher,
    fanout: NotificationFanout,
) -> None:
    alice, bob, carol = make_actor("alice"), make_actor("bob"), make_actor("carol")
    connection = FakeConnection()
    registry.register(bob.user_id, connection)

    result = await fanout.publish(_event({bob.user_id, carol.user_id}, sender_id=alice.user_id))
    await dispatcher.drain()

    assert result.delivered == {bob.user_id: True, carol.user_id: False}
    assert result.offline == {carol.user_id}
    assert not result.failed
    assert len(connection.sent) == 1
    assert connection.sent[0]["type"] == "notification"
    assert connection.sent[0]["data"]["kind"] == "post_edit"

    repository = NotificationRepository(session)
    for user in (bob, carol):
        stored = repository.list_for_user(user.user_id)
        assert len(stored) == 1
        assert stored[0].read is False
        assert stored[0].sender_id == alice.user_id
        assert stored[0].post_id == 5
    assert repository.list_for_user(alice.user_id) == []


@pytest.mark.anyio
async def test_publish_without_recipients_is_noop(session, fanout: NotificationFanout) -> None:
    result = await fanout.publish(_event(set()))

    assert result.recipients == frozenset()
    assert result.persisted == []


@pytest.mark.anyio
async def test_storage_failure_is_isolated_per_recipient(
    session, make_actor, fanout: NotificationFanout, monkeypatch: pytest.MonkeyPatch
) -> None:
    alice, bob, carol = make_actor("alice"), make_actor("bob"), make_actor("carol")

    class FlakyRepository(NotificationRepository):
        def create(self, notification):
            if notification.recipient_id == bob.user_id:
                raise RuntimeError("disk full")
            return super().create(notification)

    monkeypatch.setattr(fanout_module, "NotificationRepository", FlakyRepository)

    result = await fanout.publish(_event({bob.user_id, carol.user_id}, sender_id=alice.user_id))

    assert result.failed == {bob.user_id}
    assert [notification.recipient_id for notification in result.persisted] == [carol.user_id]
    assert len(NotificationRepository(session).list_for_user(carol.user_id)) == 1


@pytest.mark.anyio
async def test_dispatch_failure_still_stores_records(
    session, make_actor, dispatcher: NotificationDispatcher, fanout: NotificationFanout,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    alice, bob = make_actor("alice"), make_actor("bob")

    def broken_dispatch(user_ids, payload):
        raise RuntimeError("event loop gone")

    monkeypatch.setattr(dispatcher, "dispatch", broken_dispatch)

    result = await fanout.publish(_event({bob.user_id}, sender_id=alice.user_id))

    assert result.delivered == {bob.user_id: False}
    assert len(NotificationRepository(session).list_for_user(bob.user_id)) == 1

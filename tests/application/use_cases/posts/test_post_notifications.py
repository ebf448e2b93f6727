"""Tests for the notifications emitted by post, comment, like and follow actions."""

from __future__ import annotations

import asyncio

import pytest

from app.application.use_cases.posts import (
    add_comment,
    create_post,
    delete_post,
    toggle_like,
    update_post,
)
from app.application.use_cases.users import follow_user
from app.domain.entities import NotificationKind
from app.domain.exceptions import MissingActorError, NotFoundError, PermissionDeniedError
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import (
    CommentRepository,
    NotificationRepository,
    PostRepository,
)

from conftest import FakeConnection


def _kinds(session, user_id: int) -> list[NotificationKind]:
    return [n.kind for n in NotificationRepository(session).list_for_user(user_id)]


@pytest.mark.anyio
async def test_comment_notifies_author_and_previous_commenters(session, make_actor, fanout) -> None:
    alice, bob, carol = make_actor("alice"), make_actor("bob"), make_actor("carol")
    post = await create_post(session, fanout, actor=alice, content="First post #hello")

    await add_comment(session, fanout, actor=bob, post_id=post.id, content="Nice!")
    await add_comment(session, fanout, actor=carol, post_id=post.id, content="Agreed")

    assert _kinds(session, alice.user_id) == [NotificationKind.COMMENT, NotificationKind.COMMENT]
    assert _kinds(session, bob.user_id) == [NotificationKind.COMMENT_ACTIVITY]
    assert _kinds(session, carol.user_id) == []

    latest = NotificationRepository(session).list_for_user(bob.user_id)[0]
    assert latest.sender_id == carol.user_id
    assert latest.post_id == post.id
    assert latest.comment_id is not None
    assert latest.message == "carol also commented on a post you commented on"


@pytest.mark.anyio
async def test_self_comment_does_not_notify(session, make_actor, fanout) -> None:
    alice = make_actor("alice")
    post = await create_post(session, fanout, actor=alice, content="Talking to myself")

    await add_comment(session, fanout, actor=alice, post_id=post.id, content="Indeed")

    assert _kinds(session, alice.user_id) == []
    assert PostRepository(session).get(post.id).comment_count == 1


@pytest.mark.anyio
async def test_concurrent_comments_each_notify_author(make_actor, fanout) -> None:
    alice, bob, carol = make_actor("alice"), make_actor("bob"), make_actor("carol")
    author_session = SessionLocal()
    bob_session, carol_session = SessionLocal(), SessionLocal()
    try:
        post = await create_post(author_session, fanout, actor=alice, content="Busy post")

        await asyncio.gather(
            add_comment(bob_session, fanout, actor=bob, post_id=post.id, content="one"),
            add_comment(carol_session, fanout, actor=carol, post_id=post.id, content="two"),
        )

        stored = NotificationRepository(author_session).list_for_user(alice.user_id)
        assert len(stored) == 2
        assert {n.sender_id for n in stored} == {bob.user_id, carol.user_id}
        assert PostRepository(author_session).get(post.id).comment_count == 2
    finally:
        for db in (author_session, bob_session, carol_session):
            db.close()


@pytest.mark.anyio
async def test_like_notifies_author_only_on_new_like(session, make_actor, fanout) -> None:
    alice, bob = make_actor("alice"), make_actor("bob")
    post = await create_post(session, fanout, actor=alice, content="Like me")

    liked = await toggle_like(session, fanout, actor=bob, post_id=post.id)
    assert liked.liked is True
    assert liked.like_count == 1

    unliked = await toggle_like(session, fanout, actor=bob, post_id=post.id)
    assert unliked.liked is False
    assert unliked.like_count == 0

    assert _kinds(session, alice.user_id) == [NotificationKind.LIKE]


@pytest.mark.anyio
async def test_self_like_does_not_notify(session, make_actor, fanout) -> None:
    alice = make_actor("alice")
    post = await create_post(session, fanout, actor=alice, content="Own like")

    await toggle_like(session, fanout, actor=alice, post_id=post.id)

    assert _kinds(session, alice.user_id) == []


@pytest.mark.anyio
async def test_edit_reaches_engaged_users_including_offline(
    session, make_actor, registry, dispatcher, fanout
) -> None:
    alice, bob, carol, dave, erin = (
        make_actor(name) for name in ("alice", "bob", "carol", "dave", "erin")
    )
    post = await create_post(session, fanout, actor=alice, content="Draft #v1")
    await add_comment(session, fanout, actor=bob, post_id=post.id, content="hmm")
    await add_comment(session, fanout, actor=carol, post_id=post.id, content="ok")
    await toggle_like(session, fanout, actor=carol, post_id=post.id)
    await toggle_like(session, fanout, actor=dave, post_id=post.id)

    bob_connection = FakeConnection()
    registry.register(bob.user_id, bob_connection)

    updated = await update_post(session, fanout, actor=alice, post_id=post.id, content="Final #v2")
    await dispatcher.drain()

    assert updated.tags == ["v2"]
    for user in (bob, carol, dave):
        assert _kinds(session, user.user_id).count(NotificationKind.POST_EDIT) == 1
    assert _kinds(session, erin.user_id) == []
    assert NotificationKind.POST_EDIT not in _kinds(session, alice.user_id)
    assert [message["data"]["kind"] for message in bob_connection.sent] == ["post_edit"]


@pytest.mark.anyio
async def test_new_post_reaches_offline_follower_through_inbox(
    session, make_actor, registry, dispatcher, fanout
) -> None:
    alice, bob, erin = make_actor("alice"), make_actor("bob"), make_actor("erin")
    await follow_user(session, fanout, actor=bob, target_id=alice.user_id)
    await follow_user(session, fanout, actor=erin, target_id=alice.user_id)
    bob_connection = FakeConnection()
    registry.register(bob.user_id, bob_connection)

    await create_post(session, fanout, actor=alice, content="News")
    await dispatcher.drain()

    assert [message["data"]["kind"] for message in bob_connection.sent] == ["new_post"]
    assert erin.user_id not in registry
    assert _kinds(session, erin.user_id) == [NotificationKind.NEW_POST]
    assert _kinds(session, bob.user_id) == [NotificationKind.NEW_POST]


@pytest.mark.anyio
async def test_only_author_can_edit_or_delete(session, make_actor, fanout) -> None:
    alice, bob = make_actor("alice"), make_actor("bob")
    post = await create_post(session, fanout, actor=alice, content="Mine")

    with pytest.raises(PermissionDeniedError):
        await update_post(session, fanout, actor=bob, post_id=post.id, content="Yours")
    with pytest.raises(PermissionDeniedError):
        await delete_post(session, fanout, actor=bob, post_id=post.id)
    with pytest.raises(NotFoundError):
        await delete_post(session, fanout, actor=alice, post_id=post.id + 100)


@pytest.mark.anyio
async def test_delete_notifies_engaged_users_and_keeps_history(session, make_actor, fanout) -> None:
    alice, bob, carol = make_actor("alice"), make_actor("bob"), make_actor("carol")
    post = await create_post(session, fanout, actor=alice, content="Going away")
    await add_comment(session, fanout, actor=bob, post_id=post.id, content="bye")
    await toggle_like(session, fanout, actor=carol, post_id=post.id)

    await delete_post(session, fanout, actor=alice, post_id=post.id)

    assert PostRepository(session).get(post.id) is None
    assert _kinds(session, bob.user_id) == [NotificationKind.POST_DELETE]
    assert _kinds(session, carol.user_id) == [NotificationKind.POST_DELETE]
    assert _kinds(session, alice.user_id) == [NotificationKind.LIKE, NotificationKind.COMMENT]


@pytest.mark.anyio
async def test_new_post_notifies_followers(session, make_actor, fanout) -> None:
    alice, bob, carol = make_actor("alice"), make_actor("bob"), make_actor("carol")
    await follow_user(session, fanout, actor=bob, target_id=alice.user_id)

    await create_post(session, fanout, actor=alice, content="Hello followers")

    assert _kinds(session, bob.user_id) == [NotificationKind.NEW_POST]
    assert _kinds(session, carol.user_id) == []


@pytest.mark.anyio
async def test_follow_notifies_only_when_starting_to_follow(session, make_actor, fanout) -> None:
    alice, bob = make_actor("alice"), make_actor("bob")

    followed = await follow_user(session, fanout, actor=bob, target_id=alice.user_id)
    unfollowed = await follow_user(session, fanout, actor=bob, target_id=alice.user_id)

    assert followed.following is True
    assert followed.following_ids == [alice.user_id]
    assert unfollowed.following is False
    assert _kinds(session, alice.user_id) == [NotificationKind.FOLLOW]

    with pytest.raises(ValueError):
        await follow_user(session, fanout, actor=bob, target_id=bob.user_id)


@pytest.mark.anyio
async def test_missing_actor_is_rejected_before_any_write(session, make_actor, fanout) -> None:
    alice = make_actor("alice")
    post = await create_post(session, fanout, actor=alice, content="Guarded")

    with pytest.raises(MissingActorError):
        await add_comment(session, fanout, actor=None, post_id=post.id, content="anon")
    with pytest.raises(MissingActorError):
        await toggle_like(session, fanout, actor=None, post_id=post.id)
    with pytest.raises(MissingActorError):
        await create_post(session, fanout, actor=None, content="anon")

    assert PostRepository(session).get(post.id).comment_count == 0


@pytest.mark.anyio
async def test_recipient_lookup_failure_keeps_committed_changes(
    session, make_actor, fanout, monkeypatch: pytest.MonkeyPatch
) -> None:
    alice, bob = make_actor("alice"), make_actor("bob")
    post = await create_post(session, fanout, actor=alice, content="v1")
    await add_comment(session, fanout, actor=bob, post_id=post.id, content="first")

    def broken_lookup(self, post_id):
        raise RuntimeError("db hiccup")

    monkeypatch.setattr(CommentRepository, "list_author_ids", broken_lookup)

    updated = await update_post(session, fanout, actor=alice, post_id=post.id, content="v2")
    comment = await add_comment(session, fanout, actor=bob, post_id=post.id, content="second")

    assert updated.content == "v2"
    assert comment.content == "second"
    assert PostRepository(session).get(post.id).comment_count == 2
    assert _kinds(session, alice.user_id) == [NotificationKind.COMMENT]
    assert _kinds(session, bob.user_id) == []

    await delete_post(session, fanout, actor=alice, post_id=post.id)

    assert PostRepository(session).get(post.id) is None
    assert _kinds(session, bob.user_id) == []

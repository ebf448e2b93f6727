"""Build notification events for engagement on posts and profiles."""

from __future__ import annotations

import logging
from collections.abc import Callable

from app.domain.entities import (
    Actor,
    Comment,
    NotificationEvent,
    NotificationKind,
    Post,
)
from app.utils import now_in_app_timezone

from .recipients import InterestResolver

logger = logging.getLogger(__name__)


def _event(
    kind: NotificationKind,
    message: str,
    recipients: frozenset[int],
    *,
    actor: Actor,
    post_id: int | None = None,
    comment_id: int | None = None,
) -> NotificationEvent:
    return NotificationEvent(
        kind=kind,
        message=message,
        recipients=recipients,
        sender_id=actor.user_id,
        post_id=post_id,
        comment_id=comment_id,
        created_at=now_in_app_timezone(),
    )


def comment_events(
    resolver: InterestResolver, *, post: Post, comment: Comment, actor: Actor
) -> list[NotificationEvent]:
    """Tell the author about the comment and echo it to earlier commenters."""

    return [
        _event(
            NotificationKind.COMMENT,
            f"{actor.display_name} commented on your post",
            resolver.for_comment(post, actor),
            actor=actor,
            post_id=post.id,
            comment_id=comment.id,
        ),
        _event(
            NotificationKind.COMMENT_ACTIVITY,
            f"{actor.display_name} also commented on a post you commented on",
            resolver.for_comment_activity(post, actor),
            actor=actor,
            post_id=post.id,
            comment_id=comment.id,
        ),
    ]


def like_event(resolver: InterestResolver, *, post: Post, actor: Actor) -> NotificationEvent:
    return _event(
        NotificationKind.LIKE,
        f"{actor.display_name} liked your post",
        resolver.for_like(post, actor),
        actor=actor,
        post_id=post.id,
    )


def post_edit_event(
    resolver: InterestResolver, *, post: Post, actor: Actor
) -> NotificationEvent:
    return _event(
        NotificationKind.POST_EDIT,
        f"{actor.display_name} updated their post",
        resolver.for_post_edit(post, actor),
        actor=actor,
        post_id=post.id,
    )


def post_delete_event(
    resolver: InterestResolver, *, post: Post, actor: Actor
) -> NotificationEvent:
    """Build the deletion event; call before the post's engagement is removed."""

    return _event(
        NotificationKind.POST_DELETE,
        f"{actor.display_name} deleted a post you were following",
        resolver.for_post_delete(post, actor),
        actor=actor,
        post_id=post.id,
    )


def new_post_event(
    resolver: InterestResolver, *, post: Post, actor: Actor
) -> NotificationEvent:
    return _event(
        NotificationKind.NEW_POST,
        f"{actor.display_name} shared a new post",
        resolver.for_new_post(post, actor),
        actor=actor,
        post_id=post.id,
    )


def follow_event(
    resolver: InterestResolver, *, followed_id: int, actor: Actor
) -> NotificationEvent:
    return _event(
        NotificationKind.FOLLOW,
        f"{actor.display_name} started following you",
        resolver.for_follow(followed_id, actor),
        actor=actor,
    )


def resolve_events(
    build: Callable[..., NotificationEvent | list[NotificationEvent]], **kwargs: object
) -> list[NotificationEvent]:
    """Run an event builder after a committed mutation.

    A failure while resolving recipients is logged and yields no events; the
    mutation it follows stays committed.
    """

    try:
        built = build(**kwargs)
    except Exception:  # noqa: BLE001
        logger.error("Could not resolve recipients with %s", build.__name__, exc_info=True)
        return []
    return built if isinstance(built, list) else [built]


__all__ = [
    "comment_events",
    "follow_event",
    "like_event",
    "new_post_event",
    "post_delete_event",
    "post_edit_event",
    "resolve_events",
]

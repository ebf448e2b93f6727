"""Interest graph: who should hear about an engagement event."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import Actor, Post
from app.domain.exceptions import MissingActorError
from app.infrastructure.repositories import (
    CommentRepository,
    LikeRepository,
    UserRepository,
)


def require_actor(actor: Actor | None) -> Actor:
    """Return ``actor`` or fail when the caller identity is unknown."""

    if actor is None or not actor.user_id:
        raise MissingActorError("Unauthorized: user id missing")
    return actor


def collect_recipients(
    *sources: Iterable[int | None], exclude: Iterable[int | None] = ()
) -> frozenset[int]:
    """Return the union of ``sources`` without ``exclude`` and empty ids."""

    excluded = {user_id for user_id in exclude if user_id}
    recipients: set[int] = set()
    for source in sources:
        recipients.update(user_id for user_id in source if user_id)
    return frozenset(recipients - excluded)


class InterestResolver:
    """Compute the recipient set of each engagement event.

    The acting user is never part of a recipient set.
    """

    def __init__(self, session: Session) -> None:
        self._comments = CommentRepository(session)
        self._likes = LikeRepository(session)
        self._users = UserRepository(session)

    def for_comment(self, post: Post, actor: Actor) -> frozenset[int]:
        """The post author, unless they wrote the comment."""

        return collect_recipients([post.author_id], exclude=[actor.user_id])

    def for_comment_activity(self, post: Post, actor: Actor) -> frozenset[int]:
        """Everyone else who commented on the post, minus its author."""

        return collect_recipients(
            self._comments.list_author_ids(post.id),
            exclude=[actor.user_id, post.author_id],
        )

    def for_like(self, post: Post, actor: Actor) -> frozenset[int]:
        return collect_recipients([post.author_id], exclude=[actor.user_id])

    def for_post_edit(self, post: Post, actor: Actor) -> frozenset[int]:
        return self._engaged_users(post, actor)

    def for_post_delete(self, post: Post, actor: Actor) -> frozenset[int]:
        # Must run before the post's comments and likes are removed.
        return self._engaged_users(post, actor)

    def for_new_post(self, post: Post, actor: Actor) -> frozenset[int]:
        return collect_recipients(
            self._users.list_follower_ids(post.author_id), exclude=[actor.user_id]
        )

    def for_follow(self, followed_id: int, actor: Actor) -> frozenset[int]:
        return collect_recipients([followed_id], exclude=[actor.user_id])

    def _engaged_users(self, post: Post, actor: Actor) -> frozenset[int]:
        return collect_recipients(
            self._comments.list_author_ids(post.id),
            self._likes.list_user_ids(post.id),
            exclude=[actor.user_id],
        )


__all__ = ["InterestResolver", "collect_recipients", "require_actor"]

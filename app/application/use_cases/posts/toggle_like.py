"""Use case for liking and unliking a post."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases.notifications import (
    InterestResolver,
    NotificationFanout,
    like_event,
    require_actor,
    resolve_events,
)
from app.domain.entities import Actor, NotificationEvent
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import LikeRepository, PostRepository

from .update_post import POST_NOT_FOUND


@dataclass(frozen=True)
class LikeToggleResult:
    """State of the like after a toggle."""

    liked: bool
    like_count: int


def _toggle_like(
    session: Session, actor: Actor, post_id: int
) -> tuple[LikeToggleResult, list[NotificationEvent]]:
    posts = PostRepository(session)
    post = posts.get(post_id)
    if post is None:
        raise NotFoundError(POST_NOT_FOUND)

    likes = LikeRepository(session)
    events: list[NotificationEvent] = []
    if likes.exists(post_id=post_id, user_id=actor.user_id):
        likes.remove(post_id=post_id, user_id=actor.user_id)
        liked = False
    else:
        liked = likes.add(post_id=post_id, user_id=actor.user_id)
        if liked:
            events = resolve_events(
                like_event, resolver=InterestResolver(session), post=post, actor=actor
            )
        else:
            # A concurrent request from the same user stored the like first.
            liked = True

    refreshed = posts.get(post_id)
    like_count = refreshed.like_count if refreshed else post.like_count
    return LikeToggleResult(liked=liked, like_count=like_count), events


async def toggle_like(
    session: Session,
    fanout: NotificationFanout,
    *,
    actor: Actor | None,
    post_id: int,
) -> LikeToggleResult:
    """Like the post, or remove the like when it already exists.

    Only a new like notifies the post author.
    """

    actor = require_actor(actor)
    result, events = await run_in_threadpool(_toggle_like, session, actor, post_id)
    await fanout.publish_all(events)
    return result

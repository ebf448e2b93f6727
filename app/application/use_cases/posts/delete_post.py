"""Use case for deleting a post."""

from __future__ import annotations

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases.notifications import (
    InterestResolver,
    NotificationFanout,
    post_delete_event,
    require_actor,
    resolve_events,
)
from app.domain.entities import Actor, NotificationEvent
from app.domain.exceptions import NotFoundError, PermissionDeniedError
from app.infrastructure.repositories import PostRepository

from .update_post import POST_NOT_FOUND


def _delete_post(session: Session, actor: Actor, post_id: int) -> list[NotificationEvent]:
    repository = PostRepository(session)
    post = repository.get(post_id)
    if post is None:
        raise NotFoundError(POST_NOT_FOUND)
    if post.author_id != actor.user_id:
        raise PermissionDeniedError("Unauthorized to delete this post")

    events = resolve_events(
        post_delete_event, resolver=InterestResolver(session), post=post, actor=actor
    )
    repository.delete(post_id)
    return events


async def delete_post(
    session: Session,
    fanout: NotificationFanout,
    *,
    actor: Actor | None,
    post_id: int,
) -> None:
    """Delete the post and tell its commenters and likers.

    Notifications that reference the post are left untouched.
    """

    actor = require_actor(actor)
    events = await run_in_threadpool(_delete_post, session, actor, post_id)
    await fanout.publish_all(events)

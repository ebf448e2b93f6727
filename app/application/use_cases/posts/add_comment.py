"""Use case for commenting on a post."""

from __future__ import annotations

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases.notifications import (
    InterestResolver,
    NotificationFanout,
    comment_events,
    require_actor,
    resolve_events,
)
from app.domain.entities import Actor, Comment, NotificationEvent
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import CommentRepository, PostRepository
from app.utils import now_in_app_timezone

from .update_post import POST_NOT_FOUND


def _add_comment(
    session: Session,
    actor: Actor,
    post_id: int,
    content: str,
    image: str | None,
) -> tuple[Comment, list[NotificationEvent]]:
    post = PostRepository(session).get(post_id)
    if post is None:
        raise NotFoundError(POST_NOT_FOUND)

    content = (content or "").strip()
    if not content:
        raise ValueError("Content is required")

    comment = CommentRepository(session).create(
        Comment(
            id=None,
            post_id=post_id,
            author_id=actor.user_id,
            content=content,
            image=image,
            created_at=now_in_app_timezone(),
        )
    )
    events = resolve_events(
        comment_events,
        resolver=InterestResolver(session),
        post=post,
        comment=comment,
        actor=actor,
    )
    return comment, events


async def add_comment(
    session: Session,
    fanout: NotificationFanout,
    *,
    actor: Actor | None,
    post_id: int,
    content: str,
    image: str | None = None,
) -> Comment:
    """Store the comment, then notify the post author and earlier commenters."""

    actor = require_actor(actor)
    comment, events = await run_in_threadpool(
        _add_comment, session, actor, post_id, content, image
    )
    await fanout.publish_all(events)
    return comment

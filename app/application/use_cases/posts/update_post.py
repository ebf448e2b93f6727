"""Use case for editing a post."""

from __future__ import annotations

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases.notifications import (
    InterestResolver,
    NotificationFanout,
    post_edit_event,
    require_actor,
    resolve_events,
)
from app.domain.entities import Actor, NotificationEvent, Post
from app.domain.exceptions import NotFoundError, PermissionDeniedError
from app.infrastructure.repositories import PostRepository
from app.utils import extract_tags, now_in_app_timezone

POST_NOT_FOUND = "Post not found"


def _update_post(
    session: Session,
    actor: Actor,
    post_id: int,
    content: str | None,
    images: list[str] | None,
) -> tuple[Post, list[NotificationEvent]]:
    repository = PostRepository(session)
    post = repository.get(post_id)
    if post is None:
        raise NotFoundError(POST_NOT_FOUND)
    if post.author_id != actor.user_id:
        raise PermissionDeniedError("Unauthorized to update this post")

    if content is not None:
        content = content.strip()
        if not content:
            raise ValueError("Content is required")
        post.content = content
        post.tags = extract_tags(content)
    if images is not None:
        post.images = list(images)
    post.updated_at = now_in_app_timezone()

    updated = repository.update(post)
    events = resolve_events(
        post_edit_event, resolver=InterestResolver(session), post=updated, actor=actor
    )
    return updated, events


async def update_post(
    session: Session,
    fanout: NotificationFanout,
    *,
    actor: Actor | None,
    post_id: int,
    content: str | None = None,
    images: list[str] | None = None,
) -> Post:
    """Apply the author's edit and tell everyone who engaged with the post."""

    actor = require_actor(actor)
    post, events = await run_in_threadpool(
        _update_post, session, actor, post_id, content, images
    )
    await fanout.publish_all(events)
    return post

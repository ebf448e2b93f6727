"""Use case for publishing a post."""

from __future__ import annotations

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases.notifications import (
    InterestResolver,
    NotificationFanout,
    new_post_event,
    require_actor,
    resolve_events,
)
from app.domain.entities import Actor, NotificationEvent, Post
from app.infrastructure.repositories import PostRepository
from app.utils import extract_tags, now_in_app_timezone


def _create_post(
    session: Session, actor: Actor, content: str, images: list[str]
) -> tuple[Post, list[NotificationEvent]]:
    content = (content or "").strip()
    if not content:
        raise ValueError("Content is required")

    post = PostRepository(session).create(
        Post(
            id=None,
            author_id=actor.user_id,
            content=content,
            tags=extract_tags(content),
            images=list(images or []),
            created_at=now_in_app_timezone(),
        )
    )
    events = resolve_events(
        new_post_event, resolver=InterestResolver(session), post=post, actor=actor
    )
    return post, events


async def create_post(
    session: Session,
    fanout: NotificationFanout,
    *,
    actor: Actor | None,
    content: str,
    images: list[str] | None = None,
) -> Post:
    """Create a post for ``actor`` and notify their followers."""

    actor = require_actor(actor)
    post, events = await run_in_threadpool(_create_post, session, actor, content, images or [])
    await fanout.publish_all(events)
    return post

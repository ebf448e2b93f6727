"""Use case for following and unfollowing users."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases.notifications import (
    InterestResolver,
    NotificationFanout,
    follow_event,
    require_actor,
    resolve_events,
)
from app.domain.entities import Actor, NotificationEvent
from app.infrastructure.repositories import UserRepository

from .get_user import get_user


@dataclass(frozen=True)
class FollowToggleResult:
    """Follow state between the actor and the target after a toggle."""

    following: bool
    following_ids: list[int]


def _toggle_follow(
    session: Session, actor: Actor, target_id: int
) -> tuple[FollowToggleResult, list[NotificationEvent]]:
    if target_id == actor.user_id:
        raise ValueError("You cannot follow yourself")
    get_user(session, target_id)

    repository = UserRepository(session)
    events: list[NotificationEvent] = []
    if repository.is_following(actor.user_id, target_id):
        repository.unfollow(actor.user_id, target_id)
        following = False
    else:
        repository.follow(actor.user_id, target_id)
        following = True
        events = resolve_events(
            follow_event,
            resolver=InterestResolver(session),
            followed_id=target_id,
            actor=actor,
        )

    result = FollowToggleResult(
        following=following,
        following_ids=repository.list_following_ids(actor.user_id),
    )
    return result, events


async def follow_user(
    session: Session,
    fanout: NotificationFanout,
    *,
    actor: Actor | None,
    target_id: int,
) -> FollowToggleResult:
    """Follow ``target_id`` or stop following them; only a new follow notifies."""

    actor = require_actor(actor)
    result, events = await run_in_threadpool(_toggle_follow, session, actor, target_id)
    await fanout.publish_all(events)
    return result

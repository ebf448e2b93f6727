"""Read-side operations on a user's notification inbox."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Actor, Notification
from app.domain.exceptions import NotFoundError, PermissionDeniedError
from app.infrastructure.repositories import NotificationRepository

from .recipients import require_actor

NOTIFICATION_NOT_FOUND = "Notification not found"


def list_notifications(
    session: Session, actor: Actor, *, limit: int = 50
) -> Sequence[Notification]:
    """Return the newest notifications addressed to ``actor``."""

    actor = require_actor(actor)
    return NotificationRepository(session).list_for_user(actor.user_id, limit=limit)


def _get_owned(
    repository: NotificationRepository, actor: Actor, notification_id: int
) -> Notification:
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError(NOTIFICATION_NOT_FOUND)
    if notification.recipient_id != actor.user_id:
        raise PermissionDeniedError("Unauthorized")
    return notification


def mark_notification_read(
    session: Session, actor: Actor, notification_id: int
) -> Notification:
    actor = require_actor(actor)
    repository = NotificationRepository(session)
    _get_owned(repository, actor, notification_id)
    return repository.mark_as_read(notification_id)


def mark_all_notifications_read(session: Session, actor: Actor) -> int:
    """Mark every unread notification of ``actor`` as read."""

    actor = require_actor(actor)
    return NotificationRepository(session).mark_all_as_read(actor.user_id)


def delete_notification(session: Session, actor: Actor, notification_id: int) -> None:
    actor = require_actor(actor)
    repository = NotificationRepository(session)
    _get_owned(repository, actor, notification_id)
    repository.delete(notification_id)


__all__ = [
    "NOTIFICATION_NOT_FOUND",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]

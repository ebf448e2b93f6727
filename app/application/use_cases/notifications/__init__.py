"""Public helpers for emitting and reading notifications."""

from .events import (
    comment_events,
    follow_event,
    like_event,
    new_post_event,
    post_delete_event,
    post_edit_event,
    resolve_events,
)
from .fanout import NotificationFanout
from .inbox import (
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .recipients import InterestResolver, collect_recipients, require_actor

__all__ = [
    "InterestResolver",
    "NotificationFanout",
    "collect_recipients",
    "comment_events",
    "delete_notification",
    "follow_event",
    "like_event",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "new_post_event",
    "post_delete_event",
    "post_edit_event",
    "require_actor",
    "resolve_events",
]

"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationKind(str, Enum):
    """Kinds of events a notification can describe."""

    COMMENT = "comment"
    COMMENT_ACTIVITY = "comment_activity"
    LIKE = "like"
    POST_EDIT = "post_edit"
    POST_DELETE = "post_delete"
    NEW_POST = "new_post"
    FOLLOW = "follow"
    MENTION = "mention"


@dataclass
class Notification:
    """Durable copy of an event delivered to a specific recipient."""

    id: int | None
    recipient_id: int
    kind: NotificationKind
    message: str
    sender_id: int | None = None
    post_id: int | None = None
    comment_id: int | None = None
    read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationKind"]

"""Domain entities exposed by the application."""

from .actor import Actor
from .comment import Comment
from .notification import Notification, NotificationKind
from .notification_event import FanoutResult, NotificationEvent
from .post import Post
from .user import (
    USER_ROLE_ADMIN,
    USER_ROLE_MODERATOR,
    USER_ROLE_USER,
    USER_ROLES,
    User,
)

__all__ = [
    "Actor",
    "Comment",
    "FanoutResult",
    "Notification",
    "NotificationEvent",
    "NotificationKind",
    "Post",
    "User",
    "USER_ROLE_ADMIN",
    "USER_ROLE_MODERATOR",
    "USER_ROLE_USER",
    "USER_ROLES",
]

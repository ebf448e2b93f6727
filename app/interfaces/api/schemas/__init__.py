from .auth import Token
from .notification import (
    BroadcastRequest,
    BroadcastResponse,
    NotificationActionResponse,
    NotificationList,
    NotificationRead,
    NotificationResponse,
)
from .post import (
    CommentCreate,
    CommentRead,
    LikeToggleResponse,
    PostCreate,
    PostPageRead,
    PostRead,
    PostUpdate,
    TagCount,
)
from .user import FollowToggleResponse, UserCreate, UserRead, UserSummary

__all__ = [
    "BroadcastRequest",
    "BroadcastResponse",
    "CommentCreate",
    "CommentRead",
    "FollowToggleResponse",
    "LikeToggleResponse",
    "NotificationActionResponse",
    "NotificationList",
    "NotificationRead",
    "NotificationResponse",
    "PostCreate",
    "PostPageRead",
    "PostRead",
    "PostUpdate",
    "TagCount",
    "Token",
    "UserCreate",
    "UserRead",
    "UserSummary",
]

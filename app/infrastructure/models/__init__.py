"""ORM models used by the application infrastructure."""

from .comment import CommentModel
from .like import LikeModel
from .notification import NotificationModel
from .post import PostModel, PostTagModel
from .user import UserModel, follow_table

__all__ = [
    "CommentModel",
    "LikeModel",
    "NotificationModel",
    "PostModel",
    "PostTagModel",
    "UserModel",
    "follow_table",
]

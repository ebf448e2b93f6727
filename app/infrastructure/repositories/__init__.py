"""Repository implementations for infrastructure layer."""

from .comment_repository import CommentRepository
from .like_repository import LikeRepository
from .notification_repository import NotificationRepository
from .post_repository import PostRepository
from .user_repository import UserRepository

__all__ = [
    "CommentRepository",
    "LikeRepository",
    "NotificationRepository",
    "PostRepository",
    "UserRepository",
]

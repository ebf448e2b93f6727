"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user
from .follow_user import FollowToggleResult, follow_user
from .get_user import USER_NOT_FOUND, get_user, list_followers, list_following

__all__ = [
    "AuthenticationStatus",
    "FollowToggleResult",
    "USER_NOT_FOUND",
    "authenticate_user",
    "create_user",
    "follow_user",
    "get_user",
    "list_followers",
    "list_following",
]

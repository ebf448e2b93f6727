"""Use cases for posts and the engagement they receive."""

from .add_comment import add_comment
from .create_post import create_post
from .delete_post import delete_post
from .queries import (
    PostPage,
    get_feed,
    get_post,
    list_comments,
    list_posts,
    popular_tags,
    search_by_tag,
)
from .toggle_like import LikeToggleResult, toggle_like
from .update_post import update_post

__all__ = [
    "LikeToggleResult",
    "PostPage",
    "add_comment",
    "create_post",
    "delete_post",
    "get_feed",
    "get_post",
    "list_comments",
    "list_posts",
    "popular_tags",
    "search_by_tag",
    "toggle_like",
    "update_post",
]

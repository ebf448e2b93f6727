"""Read-only post queries: listings, feed, comments and hashtag search."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import Actor, Comment, Post
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from app.application.use_cases.notifications import require_actor
from app.utils import normalize_tag

from .update_post import POST_NOT_FOUND

POPULAR_TAGS_LIMIT = 5


@dataclass(frozen=True)
class PostPage:
    """A page of posts together with paging metadata."""

    posts: Sequence[Post]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def _offset(page: int, limit: int) -> int:
    if page < 1 or limit < 1:
        raise ValueError("Page and limit must be positive numbers")
    return (page - 1) * limit


def get_post(session: Session, post_id: int) -> Post:
    post = PostRepository(session).get(post_id)
    if post is None:
        raise NotFoundError(POST_NOT_FOUND)
    return post


def list_posts(session: Session, *, page: int = 1, limit: int = 10) -> PostPage:
    """Return every post, newest first."""

    skip = _offset(page, limit)
    repository = PostRepository(session)
    return PostPage(
        posts=repository.list_recent(skip=skip, limit=limit),
        total=repository.count(),
        page=page,
        limit=limit,
    )


def get_feed(
    session: Session, actor: Actor | None, *, page: int = 1, limit: int = 10
) -> PostPage:
    """Return posts written by ``actor`` or by the users they follow."""

    actor = require_actor(actor)
    skip = _offset(page, limit)
    author_ids = [actor.user_id, *UserRepository(session).list_following_ids(actor.user_id)]
    repository = PostRepository(session)
    return PostPage(
        posts=repository.list_by_authors(author_ids, skip=skip, limit=limit),
        total=repository.count_by_authors(author_ids),
        page=page,
        limit=limit,
    )


def list_comments(session: Session, post_id: int) -> Sequence[Comment]:
    get_post(session, post_id)
    return CommentRepository(session).list_for_post(post_id)


def search_by_tag(
    session: Session, tag: str, *, page: int = 1, limit: int = 10
) -> PostPage:
    normalized = normalize_tag(tag)
    if not normalized:
        raise ValueError("Tag is required")
    skip = _offset(page, limit)
    repository = PostRepository(session)
    return PostPage(
        posts=repository.list_by_tag(normalized, skip=skip, limit=limit),
        total=repository.count_by_tag(normalized),
        page=page,
        limit=limit,
    )


def popular_tags(session: Session, *, limit: int = POPULAR_TAGS_LIMIT) -> list[tuple[str, int]]:
    return PostRepository(session).popular_tags(limit=limit)

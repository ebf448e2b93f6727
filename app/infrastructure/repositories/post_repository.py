"""Persistence helpers for posts and their hashtags."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import Post
from app.infrastructure.models import (
    CommentModel,
    LikeModel,
    PostModel,
    PostTagModel,
)
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class PostRepository:
    """Provide CRUD and listing operations for :class:`Post` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, post_id: int) -> Post | None:
        # Counters are incremented in SQL, so cached rows may be stale.
        model = self.session.get(PostModel, post_id, populate_existing=True)
        return self._to_entity(model) if model else None

    def create(self, post: Post) -> Post:
        model = PostModel(
            author_id=post.author_id,
            created_at=ensure_app_naive_datetime(post.created_at or now_in_app_timezone()),
        )
        self._apply_entity_to_model(model, post)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, post: Post) -> Post:
        model = self.session.get(PostModel, post.id)
        if model is None:
            msg = f"Post with id {post.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, post)
        model.updated_at = ensure_app_naive_datetime(post.updated_at or now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, post_id: int) -> None:
        """Delete the post together with its comments, likes and hashtags."""

        model = self.session.get(PostModel, post_id)
        if model is None:
            msg = f"Post with id {post_id} not found"
            raise ValueError(msg)
        self.session.query(CommentModel).filter(CommentModel.post_id == post_id).delete(
            synchronize_session=False
        )
        self.session.query(LikeModel).filter(LikeModel.post_id == post_id).delete(
            synchronize_session=False
        )
        self.session.delete(model)
        self.session.commit()

    def list_recent(self, *, skip: int = 0, limit: int = 10) -> Sequence[Post]:
        query = (
            self.session.query(PostModel)
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count(self) -> int:
        return self.session.query(func.count(PostModel.id)).scalar() or 0

    def list_by_authors(
        self, author_ids: Sequence[int], *, skip: int = 0, limit: int = 10
    ) -> Sequence[Post]:
        if not author_ids:
            return []
        query = (
            self.session.query(PostModel)
            .filter(PostModel.author_id.in_(set(author_ids)))
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_by_authors(self, author_ids: Sequence[int]) -> int:
        if not author_ids:
            return 0
        return (
            self.session.query(func.count(PostModel.id))
            .filter(PostModel.author_id.in_(set(author_ids)))
            .scalar()
            or 0
        )

    def list_by_tag(self, tag: str, *, skip: int = 0, limit: int = 10) -> Sequence[Post]:
        query = (
            self.session.query(PostModel)
            .join(PostTagModel, PostTagModel.post_id == PostModel.id)
            .filter(PostTagModel.tag == tag)
            .order_by(PostModel.created_at.desc(), PostModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_by_tag(self, tag: str) -> int:
        return (
            self.session.query(func.count(PostTagModel.post_id))
            .filter(PostTagModel.tag == tag)
            .scalar()
            or 0
        )

    def popular_tags(self, *, limit: int = 5) -> list[tuple[str, int]]:
        usage = func.count(PostTagModel.post_id).label("usage")
        query = (
            self.session.query(PostTagModel.tag, usage)
            .group_by(PostTagModel.tag)
            .order_by(usage.desc(), PostTagModel.tag)
            .limit(limit)
        )
        return [(tag, int(count)) for tag, count in query.all()]

    @staticmethod
    def _apply_entity_to_model(model: PostModel, post: Post) -> None:
        model.content = post.content
        model.images = list(post.images or [])
        desired = list(dict.fromkeys(post.tags or []))
        existing = {tag_model.tag: tag_model for tag_model in model.tags}
        tags: list[PostTagModel] = []
        for position, tag in enumerate(desired):
            tag_model = existing.get(tag) or PostTagModel(tag=tag)
            tag_model.position = position
            tags.append(tag_model)
        model.tags = tags

    @staticmethod
    def _to_entity(model: PostModel) -> Post:
        return Post(
            id=model.id,
            author_id=model.author_id,
            content=model.content,
            tags=[tag.tag for tag in model.tags],
            images=list(model.images or []),
            comment_count=model.comment_count or 0,
            like_count=model.like_count or 0,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["PostRepository"]

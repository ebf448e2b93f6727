"""Persistence helpers for comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Comment
from app.infrastructure.models import CommentModel, PostModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class CommentRepository:
    """Provide create and query operations for :class:`Comment` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, comment: Comment) -> Comment:
        """Persist ``comment`` and bump the post's comment counter in one commit."""

        model = CommentModel(
            post_id=comment.post_id,
            author_id=comment.author_id,
            content=comment.content,
            image=comment.image,
            created_at=ensure_app_naive_datetime(comment.created_at or now_in_app_timezone()),
        )
        self.session.add(model)
        self.session.query(PostModel).filter(PostModel.id == comment.post_id).update(
            {PostModel.comment_count: PostModel.comment_count + 1},
            synchronize_session=False,
        )
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_post(self, post_id: int) -> Sequence[Comment]:
        query = (
            self.session.query(CommentModel)
            .filter(CommentModel.post_id == post_id)
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_author_ids(self, post_id: int) -> set[int]:
        """Return the distinct authors that commented on ``post_id``."""

        query = (
            self.session.query(CommentModel.author_id)
            .filter(CommentModel.post_id == post_id)
            .distinct()
        )
        return {author_id for (author_id,) in query.all()}

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            post_id=model.post_id,
            author_id=model.author_id,
            content=model.content,
            image=model.image,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["CommentRepository"]

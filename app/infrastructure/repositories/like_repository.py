"""Persistence helpers for post likes."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.infrastructure.models import LikeModel, PostModel
from app.utils import ensure_app_naive_datetime, now_in_app_timezone


class LikeRepository:
    """Toggle likes while keeping the post counter in sync."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, *, post_id: int, user_id: int) -> bool:
        return (
            self.session.query(LikeModel.id)
            .filter(LikeModel.post_id == post_id, LikeModel.user_id == user_id)
            .first()
            is not None
        )

    def add(self, *, post_id: int, user_id: int) -> bool:
        """Insert a like; return ``False`` when the user already liked the post."""

        self.session.add(
            LikeModel(
                post_id=post_id,
                user_id=user_id,
                created_at=ensure_app_naive_datetime(now_in_app_timezone()),
            )
        )
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            return False
        self._bump(post_id, 1)
        self.session.commit()
        return True

    def remove(self, *, post_id: int, user_id: int) -> bool:
        """Delete a like; return ``False`` when there was nothing to remove."""

        removed = (
            self.session.query(LikeModel)
            .filter(LikeModel.post_id == post_id, LikeModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        if not removed:
            self.session.rollback()
            return False
        self._bump(post_id, -1)
        self.session.commit()
        return True

    def list_user_ids(self, post_id: int) -> set[int]:
        """Return the distinct users that liked ``post_id``."""

        query = (
            self.session.query(LikeModel.user_id)
            .filter(LikeModel.post_id == post_id)
            .distinct()
        )
        return {user_id for (user_id,) in query.all()}

    def _bump(self, post_id: int, delta: int) -> None:
        self.session.query(PostModel).filter(PostModel.id == post_id).update(
            {PostModel.like_count: PostModel.like_count + delta},
            synchronize_session=False,
        )


__all__ = ["LikeRepository"]

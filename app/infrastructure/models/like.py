"""SQLAlchemy model for post likes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class LikeModel(Base):
    """A single user's like on a post."""

    __tablename__ = "post_like"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_like_post_user"),)

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("post.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["LikeModel"]

"""SQLAlchemy models for posts and their hashtags."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class PostModel(Base):
    """Database representation of a published post."""

    __tablename__ = "post"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    images = Column(JSON, nullable=False, default=list)
    comment_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True)
    updated_at = Column(DateTime(), nullable=True)

    tags = relationship(
        "PostTagModel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PostTagModel.position",
    )


class PostTagModel(Base):
    """Hashtag attached to a post."""

    __tablename__ = "post_tag"

    post_id = Column(Integer, ForeignKey("post.id", ondelete="CASCADE"), primary_key=True)
    tag = Column(String(100), primary_key=True, index=True)
    position = Column(Integer, nullable=False, default=0)


__all__ = ["PostModel", "PostTagModel"]

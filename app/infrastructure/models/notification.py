"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications.

    ``post_id`` and ``comment_id`` are plain integers: deleting the subject of a
    notification leaves the notification in place.
    """

    __tablename__ = "notification"
    __table_args__ = (Index("ix_notification_recipient_read", "recipient_id", "read"),)

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    kind = Column(String(30), nullable=False)
    post_id = Column(Integer, nullable=True)
    comment_id = Column(Integer, nullable=True)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]

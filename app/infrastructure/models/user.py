"""SQLAlchemy models for users and the follow graph."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.sql import expression

from app.infrastructure.database import Base

follow_table = Table(
    "follow",
    Base.metadata,
    Column("follower_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    Column("followed_id", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("follower_id", "followed_id", name="uq_follow_pair"),
)


class UserModel(Base):
    """Database representation of a social network account."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(80), nullable=True)
    last_name = Column(String(80), nullable=True)
    avatar = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    role = Column(String(20), nullable=False, default="user")
    is_verified = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


__all__ = ["UserModel", "follow_table"]

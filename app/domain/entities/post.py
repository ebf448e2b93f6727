"""Domain entity representing a post."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Post:
    """Content published by a user, optionally tagged and illustrated."""

    id: int | None
    author_id: int
    content: str
    tags: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    comment_count: int = 0
    like_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Post"]

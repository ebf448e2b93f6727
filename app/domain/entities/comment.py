"""Domain entity representing a comment on a post."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    """Reply left by a user on a post."""

    id: int | None
    post_id: int
    author_id: int
    content: str
    image: str | None = None
    created_at: datetime | None = None


__all__ = ["Comment"]

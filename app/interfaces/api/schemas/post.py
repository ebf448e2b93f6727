"""Pydantic models describing posts, comments and likes."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    images: list[str] = Field(default_factory=list, description="Image URLs")

    model_config = ConfigDict(extra="forbid")


class PostUpdate(BaseModel):
    content: str | None = Field(default=None, min_length=1, max_length=5000)
    images: list[str] | None = None

    model_config = ConfigDict(extra="forbid")


class PostRead(BaseModel):
    id: int
    author_id: int
    content: str
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    comment_count: int = 0
    like_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PostPageRead(BaseModel):
    posts: list[PostRead]
    total_posts: int
    page: int
    limit: int
    total_pages: int


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
    image: str | None = Field(default=None, description="Image URL")

    model_config = ConfigDict(extra="forbid")


class CommentRead(BaseModel):
    id: int
    post_id: int
    author_id: int
    content: str
    image: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class LikeToggleResponse(BaseModel):
    message: str
    liked: bool
    like_count: int


class TagCount(BaseModel):
    tag: str
    count: int

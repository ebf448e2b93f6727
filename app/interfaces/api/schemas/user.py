"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str | None = Field(default=None, max_length=80)
    last_name: str | None = Field(default=None, max_length=80)

    model_config = ConfigDict(extra="forbid")


class UserSummary(BaseModel):
    id: int
    username: str
    avatar: str | None = None
    is_verified: bool = False

    model_config = ConfigDict(from_attributes=True)


class UserRead(UserSummary):
    email: EmailStr
    first_name: str | None
    last_name: str | None
    bio: str | None
    role: str
    is_active: bool
    created_at: datetime | None


class FollowToggleResponse(BaseModel):
    message: str
    following: bool
    following_ids: list[int] = Field(default_factory=list)

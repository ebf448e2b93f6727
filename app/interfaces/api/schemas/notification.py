"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import NotificationKind


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    sender_id: int | None = None
    kind: NotificationKind
    post_id: int | None = None
    comment_id: int | None = None
    message: str
    read: bool = False
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationList(BaseModel):
    success: bool = True
    count: int
    data: list[NotificationRead]


class NotificationResponse(BaseModel):
    success: bool = True
    data: NotificationRead


class NotificationActionResponse(BaseModel):
    success: bool = True
    message: str
    updated: int | None = None


class BroadcastRequest(BaseModel):
    """Administrative message pushed to every connected client."""

    message: str = Field(..., min_length=1, max_length=500)
    data: dict[str, Any] = Field(default_factory=dict)


class BroadcastResponse(BaseModel):
    delivered: int
    online: int

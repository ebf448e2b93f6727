"""Event emitted by a content mutation for notification fan-out."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .notification import Notification, NotificationKind


@dataclass(frozen=True)
class NotificationEvent:
    """A single engagement event together with its resolved recipients."""

    kind: NotificationKind
    message: str
    recipients: frozenset[int]
    sender_id: int | None = None
    post_id: int | None = None
    comment_id: int | None = None
    created_at: datetime | None = None

    def for_recipient(self, recipient_id: int) -> Notification:
        """Return the durable record of this event for ``recipient_id``."""

        return Notification(
            id=None,
            recipient_id=recipient_id,
            kind=self.kind,
            message=self.message,
            sender_id=self.sender_id,
            post_id=self.post_id,
            comment_id=self.comment_id,
            read=False,
            created_at=self.created_at,
        )


@dataclass
class FanoutResult:
    """Outcome of publishing a :class:`NotificationEvent`."""

    recipients: frozenset[int] = frozenset()
    delivered: dict[int, bool] = field(default_factory=dict)
    persisted: list[Notification] = field(default_factory=list)
    failed: set[int] = field(default_factory=set)

    @property
    def offline(self) -> set[int]:
        return {user_id for user_id, ok in self.delivered.items() if not ok}


__all__ = ["NotificationEvent", "FanoutResult"]

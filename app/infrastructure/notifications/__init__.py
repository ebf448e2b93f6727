"""Realtime notification helpers for the infrastructure layer."""

from .manager import ConnectionHandle, PresenceRegistry
from .publisher import (
    NOTIFICATION_CHANNEL,
    NotificationDispatcher,
    serialize_event,
    serialize_notification,
)

__all__ = [
    "ConnectionHandle",
    "PresenceRegistry",
    "NOTIFICATION_CHANNEL",
    "NotificationDispatcher",
    "serialize_event",
    "serialize_notification",
]

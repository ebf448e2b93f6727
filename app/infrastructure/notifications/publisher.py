"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from anyio import from_thread

from app.domain.entities import Notification, NotificationEvent
from app.utils import isoformat_or_none

from .manager import PresenceRegistry

logger = logging.getLogger(__name__)

NOTIFICATION_CHANNEL = "notification"


class NotificationDispatcher:
    """Deliver notification payloads to users that are currently connected.

    Delivery is attempted once. Offline users are skipped; they read the
    durable copy from their inbox instead.
    """

    def __init__(self, registry: PresenceRegistry) -> None:
        self._registry = registry
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def registry(self) -> PresenceRegistry:
        return self._registry

    async def send_to_user(self, user_id: int, payload: dict[str, Any]) -> bool:
        """Push ``payload`` to ``user_id`` and report whether it left the server."""

        handle = self._registry.lookup(user_id)
        if handle is None:
            logger.debug("User %s is offline; notification not sent", user_id)
            return False

        try:
            await handle.send_json(_wrap(payload))
        except Exception as exc:  # noqa: BLE001 - transport errors vary by server
            logger.warning("Dropping connection of user %s after failed push: %s", user_id, exc)
            self._registry.unregister(handle)
            return False
        return True

    async def send_to_users(
        self, user_ids: Iterable[int], payload: dict[str, Any]
    ) -> dict[int, bool]:
        """Push ``payload`` to every id in ``user_ids`` independently."""

        targets = list(dict.fromkeys(user_id for user_id in user_ids if user_id))
        outcomes = await asyncio.gather(
            *(self.send_to_user(user_id, payload) for user_id in targets)
        )
        return dict(zip(targets, outcomes))

    async def broadcast(self, payload: dict[str, Any]) -> int:
        """Push ``payload`` to every open connection and return how many succeeded."""

        user_ids = [user_id for user_id, _ in self._registry.connections()]
        outcomes = await self.send_to_users(user_ids, payload)
        return sum(1 for delivered in outcomes.values() if delivered)

    def dispatch(self, user_ids: Iterable[int], payload: dict[str, Any]) -> dict[int, bool]:
        """Schedule delivery of ``payload`` without waiting for it.

        Returns, per user, whether a push was handed to the event loop. Users
        without a live connection map to ``False``.
        """

        results: dict[int, bool] = {}
        for user_id in dict.fromkeys(user_ids):
            if not user_id:
                continue
            if self._registry.lookup(user_id) is None:
                logger.debug("User %s is offline; notification not sent", user_id)
                results[user_id] = False
                continue
            results[user_id] = self._schedule_send(user_id, payload)
        return results

    async def drain(self) -> None:
        """Wait for every scheduled push to finish."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _schedule_send(self, user_id: int, payload: dict[str, Any]) -> bool:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run_sync(self._spawn, user_id, dict(payload))
            except RuntimeError as exc:
                logger.warning("Cannot schedule push for user %s outside the event loop: %s", user_id, exc)
                return False
        else:
            self._spawn(user_id, dict(payload))
        return True

    def _spawn(self, user_id: int, payload: dict[str, Any]) -> None:
        task = asyncio.get_running_loop().create_task(self.send_to_user(user_id, payload))
        self._pending.add(task)
        task.add_done_callback(self._forget_task)

    def _forget_task(self, task: asyncio.Task[bool]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Realtime push task failed: %s", exc, exc_info=exc)


def _wrap(payload: dict[str, Any]) -> dict[str, Any]:
    return {"type": NOTIFICATION_CHANNEL, "data": payload}


def serialize_event(event: NotificationEvent) -> dict[str, Any]:
    """Return the live websocket payload for ``event``."""

    return {
        "kind": event.kind.value,
        "message": event.message,
        "post_id": event.post_id,
        "comment_id": event.comment_id,
        "sender_id": event.sender_id,
        "created_at": isoformat_or_none(event.created_at),
        "read": False,
    }


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for a stored ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "kind": notification.kind.value,
        "message": notification.message,
        "post_id": notification.post_id,
        "comment_id": notification.comment_id,
        "sender_id": notification.sender_id,
        "created_at": isoformat_or_none(notification.created_at),
        "read": notification.read,
    }


__all__ = [
    "NOTIFICATION_CHANNEL",
    "NotificationDispatcher",
    "serialize_event",
    "serialize_notification",
]

"""Presence tracking for notification websockets."""

from __future__ import annotations

import logging
import threading
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ConnectionHandle(Protocol):
    """Anything able to push a JSON message to a connected client."""

    async def send_json(self, data: Any, mode: str = "text") -> None: ...


class PresenceRegistry:
    """Map each online user to the single connection that currently represents them.

    A second connection for the same user replaces the first one. Connections
    are also indexed by handle so a disconnect can be resolved without scanning
    every user.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handles: dict[int, ConnectionHandle] = {}
        self._owners: dict[ConnectionHandle, int] = {}

    def register(self, user_id: int, handle: ConnectionHandle) -> None:
        """Record ``handle`` as the active connection for ``user_id``."""

        with self._lock:
            previous = self._handles.get(user_id)
            if previous is not None and previous is not handle:
                self._owners.pop(previous, None)
            stale_owner = self._owners.get(handle)
            if stale_owner is not None and stale_owner != user_id:
                self._handles.pop(stale_owner, None)
            self._handles[user_id] = handle
            self._owners[handle] = user_id
        logger.debug("User %s is online", user_id)

    def unregister(self, handle: ConnectionHandle) -> int | None:
        """Forget ``handle`` and return the user it belonged to, if any."""

        with self._lock:
            user_id = self._owners.pop(handle, None)
            if user_id is None:
                return None
            if self._handles.get(user_id) is handle:
                del self._handles[user_id]
        logger.debug("User %s went offline", user_id)
        return user_id

    def lookup(self, user_id: int) -> ConnectionHandle | None:
        """Return the active connection for ``user_id`` or ``None`` when offline."""

        with self._lock:
            return self._handles.get(user_id)

    def connections(self) -> list[tuple[int, ConnectionHandle]]:
        """Return a snapshot of ``(user_id, handle)`` pairs."""

        with self._lock:
            return list(self._handles.items())

    def online_user_ids(self) -> set[int]:
        with self._lock:
            return set(self._handles)

    def clear(self) -> None:
        with self._lock:
            self._handles.clear()
            self._owners.clear()

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self._handles

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)


__all__ = ["ConnectionHandle", "PresenceRegistry"]

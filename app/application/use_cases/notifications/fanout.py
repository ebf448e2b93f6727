"""Fan an engagement event out to the realtime channel and the inbox."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.domain.entities import FanoutResult, Notification, NotificationEvent
from app.infrastructure.notifications import NotificationDispatcher, serialize_event
from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationFanout:
    """Deliver a :class:`NotificationEvent` to each of its recipients.

    The realtime push is scheduled and never awaited. One inbox record is
    written per recipient, each in its own session, and ``publish`` returns
    once every write has either succeeded or failed.
    """

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        session_factory: Callable[[], Session],
    ) -> None:
        self._dispatcher = dispatcher
        self._session_factory = session_factory

    async def publish(self, event: NotificationEvent) -> FanoutResult:
        recipients = frozenset(event.recipients)
        if not recipients:
            return FanoutResult()

        ordered = sorted(recipients)
        try:
            delivered = self._dispatcher.dispatch(ordered, serialize_event(event))
        except Exception:  # noqa: BLE001 - the inbox copy must still be written
            logger.error("Realtime dispatch of %s failed", event.kind.value, exc_info=True)
            delivered = {recipient: False for recipient in ordered}

        outcomes = await asyncio.gather(
            *(run_in_threadpool(self._persist, event, recipient) for recipient in ordered),
            return_exceptions=True,
        )

        result = FanoutResult(recipients=recipients, delivered=delivered)
        for recipient, outcome in zip(ordered, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Could not store %s notification for user %s: %s",
                    event.kind.value,
                    recipient,
                    outcome,
                    exc_info=outcome,
                )
                result.failed.add(recipient)
            else:
                result.persisted.append(outcome)

        logger.info(
            "Published %s to %d recipients (%d online, %d stored)",
            event.kind.value,
            len(recipients),
            sum(1 for ok in delivered.values() if ok),
            len(result.persisted),
        )
        return result

    async def publish_all(self, events: list[NotificationEvent]) -> list[FanoutResult]:
        return [await self.publish(event) for event in events]

    def _persist(self, event: NotificationEvent, recipient_id: int) -> Notification:
        session = self._session_factory()
        try:
            return NotificationRepository(session).create(event.for_recipient(recipient_id))
        finally:
            session.close()


__all__ = ["NotificationFanout"]

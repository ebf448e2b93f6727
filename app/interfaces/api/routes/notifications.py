"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases.notifications import (
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
)
from app.config import get_settings
from app.domain.entities import Actor, Notification
from app.infrastructure import database
from app.infrastructure.database import get_db
from app.infrastructure.notifications import (
    NotificationDispatcher,
    PresenceRegistry,
    serialize_notification,
)
from app.infrastructure.repositories import NotificationRepository
from app.interfaces.api.dependencies import (
    get_current_actor,
    get_dispatcher,
    require_admin,
    resolve_current_user,
)
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    BroadcastRequest,
    BroadcastResponse,
    NotificationActionResponse,
    NotificationList,
    NotificationRead,
    NotificationResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)

_POLICY_VIOLATION = 1008


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("/", response_model=NotificationList)
def list_notifications(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationList:
    """Return the most recent notifications for the authenticated user."""

    limit = get_settings().notification_history_limit
    notifications = list_notifications_uc(db, actor, limit=limit)
    return NotificationList(
        count=len(notifications),
        data=[_notification_to_schema(notification) for notification in notifications],
    )


@router.put("/read-all", response_model=NotificationActionResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationActionResponse:
    updated = mark_all_notifications_read_uc(db, actor)
    return NotificationActionResponse(
        message="All notifications marked as read", updated=updated
    )


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationResponse:
    try:
        notification = mark_notification_read_uc(db, actor, notification_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return NotificationResponse(data=_notification_to_schema(notification))


@router.delete("/{notification_id}", response_model=NotificationActionResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationActionResponse:
    try:
        delete_notification_uc(db, actor, notification_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return NotificationActionResponse(message="Notification deleted successfully")


@router.post("/broadcast", response_model=BroadcastResponse)
async def broadcast_notification(
    request: BroadcastRequest,
    actor: Actor = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> BroadcastResponse:
    """Push an administrative message to every connected user."""

    online = len(dispatcher.registry)
    delivered = await dispatcher.broadcast(
        {
            "kind": "broadcast",
            "message": request.message,
            "sender_id": actor.user_id,
            "data": request.data,
            "read": False,
        }
    )
    logger.info("Admin %s broadcast to %d of %d connections", actor.user_id, delivered, online)
    return BroadcastResponse(delivered=delivered, online=online)


def _identify(token: str) -> tuple[Actor, list[dict[str, Any]]]:
    session = database.SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        pending = NotificationRepository(session).list_unread_for_user(
            user.id, limit=get_settings().notification_history_limit
        )
        return Actor.from_user(user), [serialize_notification(n) for n in pending]
    finally:
        session.close()


async def _read_token(websocket: WebSocket) -> str | None:
    token = websocket.query_params.get("token")
    if token:
        return token
    message = await websocket.receive_json()
    if isinstance(message, dict) and message.get("type") == "identify":
        token = message.get("token")
        if isinstance(token, str) and token:
            return token
    return None


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user.

    The client identifies itself with ``?token=`` or with a first
    ``{"type": "identify", "token": ...}`` message.
    """

    registry: PresenceRegistry = websocket.app.state.presence
    await websocket.accept()

    try:
        token = await _read_token(websocket)
    except WebSocketDisconnect:
        return
    except (KeyError, ValueError):
        # Binary or malformed identify frame.
        token = None
    if not token:
        await websocket.close(code=_POLICY_VIOLATION)
        return

    try:
        actor, pending = await run_in_threadpool(_identify, token)
    except HTTPException:
        await websocket.close(code=_POLICY_VIOLATION)
        return

    registry.register(actor.user_id, websocket)
    try:
        await websocket.send_json({"type": "init", "data": pending})
        while True:
            try:
                message = await websocket.receive_json()
            except (KeyError, ValueError):
                # Binary frames and invalid JSON are ignored.
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        registry.unregister(websocket)

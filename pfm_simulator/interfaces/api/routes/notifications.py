"""Endpoints and websocket handler for alert notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.notifications import (
    delete_notification as delete_notification_uc,
    get_notification as get_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
)
from pfm_simulator.domain.entities import User
from pfm_simulator.infrastructure.database import SessionLocal, get_db
from pfm_simulator.infrastructure.notifications import (
    notification_manager,
    serialize_notification as serialize_push_payload,
)
from pfm_simulator.interfaces.api.dependencies import (
    get_current_user,
    resolve_current_user,
)
from pfm_simulator.interfaces.api.routes_helpers import serialize_notification

router = APIRouter(
    prefix="/api/v2/users/{user_id}/notifications", tags=["notifications"]
)
ws_router = APIRouter(prefix="/api/v2/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _not_found(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("")
def list_notifications(
    read: bool | None = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(25, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return one page of notifications, newest first."""

    result = list_notifications_uc(
        db, current_user.id, read=read, page=page, per_page=per_page
    )
    return {
        "notifications": [serialize_notification(n) for n in result.notifications],
        "meta": {
            "current_page": result.page,
            "per_page": result.per_page,
            "unread_count": result.unread_count,
        },
    }


@router.put("/read_all")
def read_all_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    updated = mark_all_notifications_read(db, current_user.id)
    return {"updated_count": updated}


@router.get("/{notification_id}")
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        notification = get_notification_uc(db, current_user.id, notification_id)
    except ValueError as exc:
        raise _not_found(exc) from exc
    return {"notification": serialize_notification(notification)}


@router.put("/{notification_id}/read")
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        notification = mark_notification_read(db, current_user.id, notification_id)
    except ValueError as exc:
        raise _not_found(exc) from exc
    return {"notification": serialize_notification(notification)}


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        delete_notification_uc(db, current_user.id, notification_id)
    except ValueError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@ws_router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        pending = list_notifications_uc(session, user.id, read=False).notifications
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket)
    try:
        if pending:
            await websocket.send_json(
                {"type": "init", "data": [serialize_push_payload(n) for n in pending]}
            )
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    _acknowledge(user.id, ids)
    except WebSocketDisconnect:
        logger.debug("Notification websocket closed for user %s", user.id)
    finally:
        notification_manager.disconnect(user.id, websocket)


def _acknowledge(user_id: int, ids: list) -> None:
    ack_session = SessionLocal()
    try:
        for notification_id in ids:
            try:
                mark_notification_read(ack_session, user_id, int(notification_id))
            except (TypeError, ValueError):
                logger.debug(
                    "Ignoring ack for unknown notification %s of user %s",
                    notification_id,
                    user_id,
                )
    finally:
        ack_session.close()

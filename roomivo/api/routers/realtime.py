"""Real-time channel: room joins, chat fan-out and application updates over a WebSocket."""

import json
import logging

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError
from sqlalchemy.orm import Session, sessionmaker

from roomivo.api.deps import authenticate_token, get_session_factory
from roomivo.api.exception_handlers import describe_error
from roomivo.db.models.user import User
import roomivo.repositories.user as user_repo
from roomivo.errors import (
    VALIDATION_ERROR,
    DomainError,
    DomainValidationError,
    UnauthorizedError,
)
from roomivo.schemas.error import ErrorResponse
from roomivo.schemas.message import ApplicationJoin, Message, MessageCreate, RoomJoin
from roomivo.services.application import authorize_application_join
from roomivo.services.chat_relay import (
    ERROR,
    JOINED,
    RECEIVE_MESSAGE,
    ChatRelay,
    application_room,
    conversation_room,
    event_payload,
    get_chat_relay,
)
from roomivo.services.message import authorize_conversation, send_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


async def _join_room(websocket: WebSocket, data: dict, user: User, db: Session, relay: ChatRelay):
    join = RoomJoin.model_validate(data)
    authorize_conversation(db, user, join.property_id, join.tenant_id, join.landlord_id)
    room = conversation_room(join.property_id, join.tenant_id, join.landlord_id)
    relay.join(room, websocket)
    await websocket.send_json(event_payload(JOINED, {"room": room}))


async def _join_application(
    websocket: WebSocket, data: dict, user: User, db: Session, relay: ChatRelay
):
    join = ApplicationJoin.model_validate(data)
    authorize_application_join(db, join.application_id, user)
    room = application_room(join.application_id)
    relay.join(room, websocket)
    await websocket.send_json(event_payload(JOINED, {"room": room}))


async def _send_message(
    websocket: WebSocket, data: dict, user: User, db: Session, relay: ChatRelay
):
    incoming = MessageCreate.model_validate(data)
    message = send_message(
        db,
        user,
        tenant_id=incoming.tenant_id,
        landlord_id=incoming.landlord_id,
        property_id=incoming.property_id,
        body=incoming.message,
    )
    await relay.broadcast(
        conversation_room(message.property_id, message.tenant_id, message.landlord_id),
        RECEIVE_MESSAGE,
        Message.model_validate(message).model_dump(by_alias=True),
    )


HANDLERS = {
    "join-room": _join_room,
    "join-application": _join_application,
    "send-message": _send_message,
}


async def _send_error(websocket: WebSocket, body: ErrorResponse) -> None:
    await websocket.send_json(event_payload(ERROR, body.model_dump()))


async def _dispatch(
    websocket: WebSocket, raw: str, user_id: int, session_factory: sessionmaker, relay: ChatRelay
):
    """Handle one client frame inside its own short-lived session."""
    try:
        frame = json.loads(raw)
        if not isinstance(frame, dict):
            raise DomainValidationError("Frames must be JSON objects")
        handler = HANDLERS.get(frame.get("event"))
        if handler is None:
            raise DomainValidationError(f"Unknown event '{frame.get('event')}'")
        with session_factory() as db:
            user = user_repo.get_user_by_id(db, user_id)
            if user is None:
                raise UnauthorizedError("User not found")
            await handler(websocket, frame.get("data") or {}, user, db, relay)
    except json.JSONDecodeError:
        await _send_error(websocket, ErrorResponse(detail="Invalid JSON", code=VALIDATION_ERROR))
    except ValidationError as e:
        detail = f"Invalid payload: {e.errors()[0]['msg']}"
        await _send_error(websocket, ErrorResponse(detail=detail, code=VALIDATION_ERROR))
    except DomainError as e:
        _, body = describe_error(e)
        await _send_error(websocket, body)


@router.websocket("/ws")
async def realtime_channel(
    websocket: WebSocket,
    token: str | None = Query(None),
    session_factory: sessionmaker = Depends(get_session_factory),
    relay: ChatRelay = Depends(get_chat_relay),
):
    """
    Authenticated duplex channel. Pass the bearer token as ``?token=``.

    Client frames are ``{"event": ..., "data": {...}}`` with events
    ``join-room``, ``join-application`` and ``send-message``. Rooms can only be
    joined by the participants the token identifies.

    No database connection is held while the socket is idle: the token is
    checked in its own session and every frame opens a fresh one.
    """
    user_id = None
    if token:
        with session_factory() as db:
            try:
                user_id = authenticate_token(db, token).id
            except DomainError as e:
                logger.info("Rejected WebSocket connection: %s", e)
    if user_id is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.info("User %s connected to the real-time channel", user_id)
    try:
        while True:
            raw = await websocket.receive_text()
            await _dispatch(websocket, raw, user_id, session_factory, relay)
    except WebSocketDisconnect:
        logger.info("User %s disconnected from the real-time channel", user_id)
    finally:
        relay.leave_all(websocket)

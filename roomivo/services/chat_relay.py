"""In-process fan-out of real-time events to WebSocket room members."""

import logging
from collections import defaultdict
from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette.requests import HTTPConnection
from starlette.websockets import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

RECEIVE_MESSAGE = "receive-message"
APPLICATION_UPDATED = "application-updated"
JOINED = "joined"
ERROR = "error"


def conversation_room(property_id: int, tenant_id: int, landlord_id: int) -> str:
    return f"property-{property_id}:tenant-{tenant_id}:landlord-{landlord_id}"


def application_room(application_id: int) -> str:
    return f"app-{application_id}"


def event_payload(event: str, data: Any) -> dict[str, Any]:
    return {"event": event, "data": jsonable_encoder(data)}


class ChatRelay:
    """Room membership and broadcast for connected sockets.

    Membership checks happen before ``join`` is called; the relay itself only
    tracks who is listening where. One instance lives on ``app.state``.
    """

    def __init__(self) -> None:
        self._rooms: dict[str, set[WebSocket]] = defaultdict(set)

    def join(self, room: str, websocket: WebSocket) -> None:
        self._rooms[room].add(websocket)
        logger.debug("Socket joined room %s (%d members)", room, len(self._rooms[room]))

    def leave_all(self, websocket: WebSocket) -> None:
        for room in list(self._rooms):
            members = self._rooms[room]
            members.discard(websocket)
            if not members:
                del self._rooms[room]

    def member_count(self, room: str) -> int:
        return len(self._rooms.get(room, ()))

    async def broadcast(self, room: str, event: str, data: Any) -> int:
        """Send an event to every member of a room. Returns how many received it."""
        payload = event_payload(event, data)
        delivered = 0
        for websocket in list(self._rooms.get(room, ())):
            try:
                await websocket.send_json(payload)
            except (RuntimeError, WebSocketDisconnect, OSError) as e:
                logger.info("Dropping dead socket from room %s: %s", room, e)
                self.leave_all(websocket)
                continue
            delivered += 1
        return delivered


def get_chat_relay(connection: HTTPConnection) -> ChatRelay:
    """Dependency returning the relay of the running application (HTTP or WebSocket)."""
    return connection.app.state.chat_relay

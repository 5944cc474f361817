"""
Real-time Chat Relay

Each WebSocket connection joins a room named after a user id. A sent
message is written to the messages table first, then pushed to every
connection in the receiver's room and echoed back to the sender's own
connection.

Frames are JSON objects: {"event": "<name>", "data": <payload>}

    client -> server   join            "buyer_1"
    client -> server   send_message    {"sender_id", "receiver_id", "content"}
    server -> client   receive_message {"sender_id", "receiver_id", "content"}

There is no identity check on join and no error frame.
"""
import logging
from typing import Dict, Set, Any

from fastapi import WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError

from app.services.marketplace_service import MessageService

logger = logging.getLogger(__name__)

RECEIVE_EVENT = "receive_message"


class ConnectionManager:
    def __init__(self):
        # room name (user id) -> connections joined to it
        self.rooms: Dict[str, Set[WebSocket]] = {}
        self.message_service = MessageService()

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        logger.info("A user connected: %s", id(websocket))

    def join(self, websocket: WebSocket, user_id: Any):
        room = str(user_id)
        self.rooms.setdefault(room, set()).add(websocket)
        logger.info("User %s joined their room", room)

    def disconnect(self, websocket: WebSocket):
        for room in list(self.rooms):
            self.rooms[room].discard(websocket)
            if not self.rooms[room]:
                del self.rooms[room]
        logger.info("User disconnected")

    def room_size(self, room: str) -> int:
        return len(self.rooms.get(room, ()))

    async def emit(self, connection: WebSocket, event: str, data: Any) -> bool:
        """Send one frame. A closed connection is dropped from its rooms."""
        try:
            await connection.send_json({"event": event, "data": data})
            return True
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            logger.warning("Dropping dead connection %s: %r", id(connection), e)
            self.disconnect(connection)
            return False

    async def emit_to_room(self, room: str, event: str, data: Any):
        for connection in list(self.rooms.get(room, ())):
            await self.emit(connection, event, data)

    async def send_message(self, websocket: WebSocket, data: dict):
        """
        Persist, fan out to the receiver's room, then echo to the sender.

        A sender joined to the receiver's room gets both copies.
        """
        sender_id = data.get("sender_id")
        receiver_id = data.get("receiver_id")
        try:
            await run_in_threadpool(
                self.message_service.create, sender_id, receiver_id, data.get("content")
            )
        except SQLAlchemyError as e:
            logger.error("Dropping message from %s: %s", sender_id, e)
            return

        await self.emit_to_room(str(receiver_id), RECEIVE_EVENT, data)
        await self.emit(websocket, RECEIVE_EVENT, data)

    async def dispatch(self, websocket: WebSocket, frame: Any):
        """Route one incoming frame. Unknown or malformed frames are ignored."""
        if not isinstance(frame, dict):
            return
        event = frame.get("event")
        data = frame.get("data")

        if event == "join" and data is not None:
            self.join(websocket, data)
        elif event == "send_message" and isinstance(data, dict):
            await self.send_message(websocket, data)
        else:
            logger.debug("Ignoring frame %r", event)


manager = ConnectionManager()


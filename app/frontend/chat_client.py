"""
Chat socket client.

Speaks the relay's JSON frames ({"event": ..., "data": ...}) over any
connection object with send_json/receive_json. `connect()` opens a real
socket with the websockets library; tests pass Starlette's test session.
"""
from __future__ import annotations

import json
import os
import typing as t

WS_URL = os.getenv("CHAT_WS_URL") or "ws://localhost:3000/ws"


class _WebSocketConnection:
    """Adapts a websockets sync connection to send_json/receive_json."""

    def __init__(self, connection):
        self._connection = connection

    def send_json(self, data: t.Any) -> None:
        self._connection.send(json.dumps(data))

    def receive_json(self) -> t.Any:
        return json.loads(self._connection.recv())

    def close(self) -> None:
        self._connection.close()


class ChatClient:
    def __init__(self, connection):
        self.connection = connection

    @classmethod
    def connect(cls, url: str = WS_URL) -> "ChatClient":
        from websockets.sync.client import connect

        return cls(_WebSocketConnection(connect(url)))

    def join(self, user_id: str) -> None:
        self.connection.send_json({"event": "join", "data": user_id})

    def send_message(self, sender_id: str, receiver_id: str, content: str) -> None:
        self.connection.send_json({
            "event": "send_message",
            "data": {"sender_id": sender_id, "receiver_id": receiver_id, "content": content},
        })

    def receive(self) -> dict | None:
        """Block for the next frame; return the message payload or None."""
        frame = self.connection.receive_json()
        if isinstance(frame, dict) and frame.get("event") == "receive_message":
            return frame.get("data")
        return None

    def close(self) -> None:
        self.connection.close()

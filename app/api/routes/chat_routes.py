"""
Chat Routes

WS /ws - Real-time chat relay (join a user room, send/receive messages)
"""
import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.services.chat_relay import manager

router = APIRouter(tags=["Chat"])


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket):
    await manager.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = json.loads(raw)
            except ValueError:
                continue
            await manager.dispatch(websocket, frame)
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)

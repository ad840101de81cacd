import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from structlog import get_logger

from protohub.core.database import async_session_maker
from protohub.realtime import manager
from protohub.realtime.classroom import CLASSROOM_MESSAGES, Classroom

logger = get_logger()
router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await manager.connect(websocket)
    classroom = Classroom(async_session_maker)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError as e:
                logger.warning("Invalid WebSocket message", error=str(e))
                continue

            if not isinstance(message, dict):
                logger.info("WebSocket message received", message=message)
            elif message.get("type") == "ping":
                await websocket.send_text(json.dumps({"type": "pong"}))
            elif message.get("type") in CLASSROOM_MESSAGES:
                reply = await classroom.handle(message)
                if reply is not None:
                    await websocket.send_text(json.dumps(reply))
            else:
                logger.info("WebSocket message received", message=message)
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")
    finally:
        manager.disconnect(websocket)

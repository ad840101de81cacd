import json
from datetime import datetime, timezone
from typing import Any, Dict, Set

from fastapi import WebSocket
from structlog import get_logger

logger = get_logger()


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConnectionManager:
    """Tracks open ``/ws`` sockets and fans JSON messages out to all of them."""

    def __init__(self):
        self._connections: Set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        logger.info("WebSocket client connected", clients=self.connection_count)

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        logger.info("WebSocket client disconnected", clients=self.connection_count)

    async def broadcast(self, message: Dict[str, Any]) -> int:
        """Send ``message`` to every client; returns how many received it."""
        if not self._connections:
            return 0
        payload = json.dumps(message, default=str)
        delivered = 0
        for websocket in list(self._connections):
            try:
                await websocket.send_text(payload)
                delivered += 1
            except Exception as e:
                logger.warning("Dropping unreachable WebSocket client", error=str(e))
                self._connections.discard(websocket)
        return delivered


manager = ConnectionManager()

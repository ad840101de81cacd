"""
Reconnecting client for the ``/ws`` broadcast channel.

Messages are JSON objects tagged by ``type``; each one is handed to the
listeners registered for that type. When the connection drops the client
waits ``reconnect_delay`` seconds (fixed, no backoff) and connects again until
``close()`` is called. Messages sent while disconnected are queued and
flushed in order after the next successful connect.

    client = ReconnectingWebSocket("ws://localhost:8000/ws")
    client.add_listener("trendsUpdate", on_trends)
    await client.run()
"""
import asyncio
import inspect
import json
import sys
from collections import defaultdict, deque
from typing import Any, Callable, Deque, Dict, List

import structlog
import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

logger = structlog.get_logger()

Listener = Callable[[Dict[str, Any]], Any]


class ReconnectingWebSocket:
    def __init__(self, url: str, reconnect_delay: float = 3.0):
        self.url = url
        self.reconnect_delay = reconnect_delay
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self._pending: Deque[str] = deque()
        self._socket = None
        self._closed = asyncio.Event()

    @property
    def connected(self) -> bool:
        return self._socket is not None

    def add_listener(self, message_type: str, callback: Listener) -> None:
        self._listeners[message_type].append(callback)

    def remove_listener(self, message_type: str, callback: Listener) -> None:
        listeners = self._listeners.get(message_type, [])
        self._listeners[message_type] = [cb for cb in listeners if cb is not callback]

    async def send(self, message: Dict[str, Any]) -> None:
        payload = json.dumps(message)
        if self._socket is None:
            self._pending.append(payload)
            return
        try:
            await self._socket.send(payload)
        except ConnectionClosed:
            self._pending.append(payload)

    async def dispatch(self, raw: str) -> None:
        try:
            message = json.loads(raw)
            message_type = message["type"]
        except (ValueError, TypeError, KeyError) as e:
            logger.warning("Ignoring malformed WebSocket message", error=str(e))
            return
        if not isinstance(message_type, str):
            logger.warning("Ignoring WebSocket message without a string type", message_type=repr(message_type))
            return

        for callback in list(self._listeners.get(message_type, [])):
            try:
                result = callback(message)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error("WebSocket listener failed", message_type=message_type, error=str(e), exc_info=True)

    async def _flush_pending(self) -> None:
        while self._pending and self._socket is not None:
            await self._socket.send(self._pending[0])
            self._pending.popleft()

    async def _serve(self, socket) -> None:
        self._socket = socket
        logger.info("WebSocket connection established", url=self.url)
        try:
            await self._flush_pending()
            async for raw in socket:
                await self.dispatch(raw)
        finally:
            self._socket = None

    async def run(self) -> None:
        while not self._closed.is_set():
            try:
                async with websockets.connect(self.url) as socket:
                    await self._serve(socket)
            except (WebSocketException, OSError, asyncio.TimeoutError) as e:
                # Rejected handshakes and timeouts are retried like dropped connections
                logger.warning("WebSocket connection lost", url=self.url, error=str(e))
            if self._closed.is_set():
                break
            logger.info("Reconnecting WebSocket", url=self.url, delay=self.reconnect_delay)
            try:
                await asyncio.wait_for(self._closed.wait(), timeout=self.reconnect_delay)
            except asyncio.TimeoutError:
                pass

    async def close(self) -> None:
        self._closed.set()
        self._listeners.clear()
        socket = self._socket
        if socket is not None:
            await socket.close()


async def _print_messages(url: str) -> None:
    client = ReconnectingWebSocket(url)
    for message_type in ("trendsUpdate", "metricsUpdate", "activityUpdate", "trendSurge", "newTrend"):
        client.add_listener(message_type, lambda message: print(json.dumps(message)))
    await client.run()


if __name__ == "__main__":
    asyncio.run(_print_messages(sys.argv[1] if len(sys.argv) > 1 else "ws://localhost:8000/ws"))

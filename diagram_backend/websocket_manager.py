"""
Change feed for editor clients connected over WebSocket.

Every event carries a `seq` number that grows by one per event, so a
client that sees a gap knows it missed an update and should re-read
GET /api/graph. Clients may send "ping" and get a pong event back.
"""
import asyncio
import json
import logging
from typing import Optional

from fastapi import WebSocket

logger = logging.getLogger(__name__)

PING = "ping"


class WebSocketManager:
    """Registry of connected clients and the events pushed to them."""

    def __init__(self):
        self._clients: set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._seq = 0

    @property
    def connection_count(self) -> int:
        return len(self._clients)

    @property
    def last_seq(self) -> int:
        """Sequence number of the last event published (0 before the first)."""
        return self._seq

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        async with self._lock:
            self._clients.add(websocket)
        logger.info(f"Editor client connected ({self.connection_count} open)")

    async def disconnect(self, websocket: WebSocket):
        async with self._lock:
            self._clients.discard(websocket)
        logger.info(f"Editor client disconnected ({self.connection_count} open)")

    async def publish(self, event_type: str, **payload) -> int:
        """
        Send one event to every client.

        A client whose send raises is dropped from the registry.

        Returns:
            Number of clients the event reached
        """
        self._seq += 1
        text = json.dumps({"type": event_type, "seq": self._seq, **payload})

        async with self._lock:
            dropped = set()
            for websocket in self._clients:
                try:
                    await websocket.send_text(text)
                except Exception as e:
                    logger.warning(f"Dropping editor client after failed send: {e}")
                    dropped.add(websocket)
            self._clients -= dropped
            return len(self._clients)

    async def notify_graph_updated(self, vertex_count: int, edge_count: int) -> int:
        return await self.publish(
            "graph_updated",
            vertex_count=vertex_count,
            edge_count=edge_count
        )

    async def handle_message(self, websocket: WebSocket, text: str) -> Optional[str]:
        """Answer a client message. Only "ping" has a reply; anything else is ignored."""
        if text.strip() != PING:
            logger.debug(f"Ignoring client message {text!r}")
            return None

        reply = json.dumps({"type": "pong", "seq": self._seq})
        await websocket.send_text(reply)
        return reply


ws_manager = WebSocketManager()

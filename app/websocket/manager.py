# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Tracks open WebSocket connections per user and sends messages to them.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   await websocket_manager.connect(user_id, websocket)
#   await websocket_manager.send(websocket, {"type": "slug_status", ...})
#   websocket_manager.disconnect(user_id, websocket)
# =============================================================================

import logging

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages WebSocket connections organized by user ID.

    A user can have several editor tabs open; each is its own connection
    with its own debounced slug check.
    """

    def __init__(self):
        # user_id -> set of WebSocket connections
        self.connections: dict[str, set[WebSocket]] = {}
        self._total_connections = 0

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        """Accept a new WebSocket connection and track it."""
        await websocket.accept()

        self.connections.setdefault(user_id, set()).add(websocket)
        self._total_connections += 1

        logger.info(
            f"WebSocket connected for user {user_id}. "
            f"Total connections: {self._total_connections}"
        )

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        """Stop tracking a connection (idempotent)."""
        sockets = self.connections.get(user_id)
        if sockets and websocket in sockets:
            sockets.discard(websocket)
            self._total_connections -= 1
            if not sockets:
                del self.connections[user_id]

        logger.info(
            f"WebSocket disconnected for user {user_id}. "
            f"Total connections: {self._total_connections}"
        )

    async def send(self, websocket: WebSocket, message: dict) -> bool:
        """
        Send one JSON message.

        Returns:
            bool: False if the socket was already gone
        """
        try:
            await websocket.send_json(message)
            return True
        except Exception as e:
            logger.warning(f"Failed to send to WebSocket: {e}")
            return False

    def get_connection_count(self, user_id: str | None = None) -> int:
        if user_id:
            return len(self.connections.get(user_id, set()))
        return self._total_connections


# Global singleton instance
websocket_manager = ConnectionManager()

# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Provides the live slug availability channel used by the profile editor.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   await websocket_manager.send(websocket, {
#       "type": "slug_status",
#       "slug": "sao-joao",
#       "status": "available"
#   })
# =============================================================================

from app.websocket.manager import websocket_manager

__all__ = [
    "websocket_manager",
]

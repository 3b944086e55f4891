# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# Live slug availability for the profile editor.
#
# Connect: ws://host/ws/slug-check?token={jwt}
#
# The client sends the raw slug text on every keystroke. The server
# normalizes it and, once typing pauses for SLUG_CHECK_DEBOUNCE_MS, replies:
#   {"type": "slug_status", "slug": "sao-joao", "status": "available"}
#
# Candidates too short to check are answered immediately with "unknown"
# and cancel any pending check. The pending check is also cancelled when
# the socket closes.
# =============================================================================

import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool

from app.auth.dependencies import InvalidTokenError, decode_token
from app.config import settings
from app.websocket.manager import websocket_manager
from core.services.profile_service import ProfileService
from lib.debounce import Debouncer
from lib.slugs import SlugAvailability, is_checkable, normalize_slug
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/slug-check")
async def slug_check_websocket(
    websocket: WebSocket,
    token: str = Query(..., description="JWT token for authentication")
):
    """
    WebSocket endpoint for debounced slug availability checks.

    Authentication is required via the `token` query parameter; the
    caller's own profile never counts as holding the slug.
    """
    # 1. Verify JWT token
    try:
        user = await run_in_threadpool(decode_token, token)
    except InvalidTokenError as e:
        logger.warning(f"WebSocket auth failed: {e}")
        await websocket.close(code=4001, reason="Invalid token")
        return

    user_id = str(user.id)

    async def check(candidate: str) -> None:
        try:
            result = await run_in_threadpool(
                ProfileService.check_slug_availability, candidate, user_id
            )
        except SupabaseClientError as e:
            logger.error(f"Slug check failed for user {user_id}: {e.message}")
            await websocket_manager.send(websocket, {
                "type": "error",
                "code": e.code,
                "detail": e.message,
            })
            return
        await websocket_manager.send(websocket, {
            "type": "slug_status",
            "slug": result.slug,
            "status": result.status.value,
        })

    debouncer = Debouncer(settings.slug_check_debounce_seconds, check)

    # 2. Accept connection and add to manager
    await websocket_manager.connect(user_id, websocket)

    try:
        await websocket.send_json({
            "type": "connected",
            "debounce_ms": settings.SLUG_CHECK_DEBOUNCE_MS,
        })

        while True:
            data = await websocket.receive_text()

            if data == "ping":
                await websocket.send_text("pong")
                continue

            slug = normalize_slug(data)
            if not is_checkable(slug):
                debouncer.cancel_pending()
                await websocket.send_json({
                    "type": "slug_status",
                    "slug": slug,
                    "status": SlugAvailability.UNKNOWN.value,
                })
                continue

            debouncer.trigger(slug)

    except WebSocketDisconnect:
        logger.info(f"Slug-check client disconnected (user {user_id})")
    finally:
        await debouncer.aclose()
        websocket_manager.disconnect(user_id, websocket)


@router.get("/ws/status")
async def websocket_status():
    """
    Get WebSocket connection statistics.

    Returns:
        dict: Connection counts
    """
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "user_count": len(websocket_manager.connections),
    }

"""
Log WebSocket Management Module
================================

Live stream of operational events (ingestion, logins, errors) to dashboard
clients connected on the /logs WebSocket.

Message Format:
--------------
    {
        "msg_type": "log" | "warning" | "error",
        "message": "[INGEST] New device registered: D1 (77/S1)",
        "timestamp": "2025-12-01T10:30:00+00:00"
    }

Usage Example:
-------------
    from src.Core.log_ws import log_from_thread

    log_from_thread("[INGEST] Batch processed: 10 ok, 0 failed")
    log_from_thread("[AUTH] Failed login for 'admin'", "warning")

Every message is also printed to the console, so the stream is an addition
to the process output, never a replacement.
"""

from datetime import datetime, timezone
from typing import Dict, Any
from fastapi import WebSocket
from .wsBase import WebSocketManager


LOG_LEVELS = ("log", "warning", "error")


def log_from_thread(message: str, msg_type: str = "log"):
    """
    Print a message and broadcast it to every connected log client.

    Safe to call from sync route handlers (threadpool) and from the event
    loop alike.

    Args:
        message: Text of the event, usually prefixed with a [TAG]
        msg_type: "log" (default), "warning" or "error"
    """
    if msg_type not in LOG_LEVELS:
        msg_type = "log"

    print(message)

    if log_ws_manager.has_clients:
        payload: Dict[str, Any] = {
            "msg_type": msg_type,
            "message": str(message),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        log_ws_manager.send_from_thread(payload)


class LogWebSocketManager(WebSocketManager):
    """WebSocket manager for the operational log stream."""

    async def handle_message(self, ws: WebSocket, message: str):
        # Clients may send keepalive pings; nothing else is expected
        if message.strip().lower() == "ping":
            await ws.send_text('{"msg_type": "pong"}')
            return
        print(f"[LOG-WS] Ignored client message: {message}")


# ============================================================
# GLOBAL LOG WEBSOCKET MANAGER INSTANCE
# ============================================================
log_ws_manager = LogWebSocketManager()
"""Singleton used by log_from_thread() and the /logs endpoint."""

"""
WebSocket Base Manager Module
==============================

Thread-safe bookkeeping for WebSocket clients of the monitoring backend.

Route handlers in this application are synchronous and run in FastAPI's
threadpool, so anything they want to push to a socket has to be scheduled on
the main event loop. WebSocketManager keeps the client list behind a
threading.Lock and offers send_from_thread() for exactly that.

Lifecycle:
---------
    1. manager = SomeManager()
    2. manager.set_main_loop(asyncio.get_running_loop())   # lifespan
    3. await manager.register(ws)                           # on connect
    4. manager.send_from_thread({...}) / await manager.broadcast({...})
    5. manager.unregister(ws)                               # on disconnect

Error Handling:
--------------
- A failed handshake unregisters the client before re-raising
- A failed send drops that client; the others still receive the message
- unregister() is idempotent
"""

from fastapi import WebSocket
import asyncio
from typing import List, Optional, Dict, Any
import json
import threading


class WebSocketManager:
    """
    Base manager for a set of concurrent WebSocket clients.

    Attributes:
        clients: Active connections
        main_loop: Event loop used by send_from_thread()
    """

    def __init__(self):
        self.clients: List[WebSocket] = []
        self.main_loop: Optional[asyncio.AbstractEventLoop] = None
        self._lock = threading.Lock()

    def set_main_loop(self, loop: asyncio.AbstractEventLoop):
        """Must be called from the lifespan handler before send_from_thread() works."""
        self.main_loop = loop

    async def register(self, ws: WebSocket):
        with self._lock:
            if ws not in self.clients:
                self.clients.append(ws)

        try:
            await ws.accept()
            print(f"[WS] Client registered. Total clients: {len(self.clients)}")
        except Exception:
            self.unregister(ws)
            raise

    def unregister(self, ws: WebSocket):
        with self._lock:
            if ws in self.clients:
                self.clients.remove(ws)
                print(f"[WS] Client unregistered. Total clients: {len(self.clients)}")

    @property
    def has_clients(self) -> bool:
        with self._lock:
            return len(self.clients) > 0

    async def broadcast(self, message: Dict[str, Any]):
        """
        Send a JSON message to every client.

        The client list is copied under the lock and the sends happen
        without it. Clients whose send fails are unregistered afterwards.
        """
        to_remove = []

        with self._lock:
            current_clients = list(self.clients)

        for ws in current_clients:
            try:
                await ws.send_text(json.dumps(message, default=str))
            except Exception:
                to_remove.append(ws)

        for ws in to_remove:
            self.unregister(ws)

    def send_from_thread(self, message: Dict[str, Any]):
        """
        Schedule broadcast() on the main loop from a worker thread.

        Fire and forget: the caller never waits for delivery. Without
        clients, or before set_main_loop(), nothing is scheduled.
        """
        if not self.has_clients or self.main_loop is None:
            return

        if self.main_loop.is_closed():
            return

        asyncio.run_coroutine_threadsafe(self.broadcast(message), self.main_loop)

    async def handle_message(self, ws: WebSocket, message: str):
        """Template method for subclasses; the base class only echoes to the console."""
        print(f"[WS] Received message from client: {message}")

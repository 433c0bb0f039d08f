# src/Services/session_store.py
"""
Server-side session store for administrator logins.

Purpose:
- Map an opaque cookie token to the administrator login
- Expire sessions after an idle period (sliding expiration)
- Limit memory usage with LRU eviction

Architecture:
- Thread-safe (uses threading.Lock); sync endpoints run in a threadpool
- LRU eviction (removes least recently used sessions when full)
- TTL refreshed on every successful lookup

The store is process-local. Running several workers requires sticky sessions
or a shared store implementing the same get/set/delete interface.
"""

import secrets
import time
import threading
from typing import Dict, Optional, Any
from collections import OrderedDict
from src.Core.config import settings


class SessionStore:
    """
    Thread-safe in-memory session store with LRU eviction and idle expiry.

    Attributes:
        max_size: Maximum number of live sessions
        idle_timeout: Seconds a session survives without being used
    """

    def __init__(self, max_size: int = 10000, idle_timeout: int = 604800):
        self._sessions: OrderedDict[str, Dict[str, Any]] = OrderedDict()
        self._lock = threading.Lock()
        self.max_size = max_size
        self.idle_timeout = idle_timeout

    def create(self, login: str) -> str:
        """
        Open a new session for `login` and return its token.

        Example:
            token = session_store.create("admin77")
            response.set_cookie(settings.SESSION_COOKIE_NAME, token, httponly=True)
        """
        token = secrets.token_urlsafe(32)
        self.set(token, login)
        return token

    def set(self, token: str, login: str) -> None:
        """Store (or replace) the login bound to `token`."""
        with self._lock:
            now = time.time()
            self._sessions[token] = {
                "login": login,
                "created_at": now,
                "expires_at": now + self.idle_timeout,
            }
            self._sessions.move_to_end(token)

            if len(self._sessions) > self.max_size:
                oldest_token = next(iter(self._sessions))
                del self._sessions[oldest_token]

    def get(self, token: Optional[str]) -> Optional[str]:
        """
        Resolve a token to its login, refreshing the idle timeout.

        Returns:
            The administrator login, or None for unknown/expired tokens
        """
        if not token:
            return None

        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None

            now = time.time()
            if now > entry["expires_at"]:
                del self._sessions[token]
                return None

            entry["expires_at"] = now + self.idle_timeout
            self._sessions.move_to_end(token)
            return entry["login"]

    def delete(self, token: Optional[str]) -> bool:
        """
        Destroy a session (logout).

        Returns:
            True if a session was removed, False otherwise
        """
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def delete_login(self, login: str) -> int:
        """Destroy every session of one administrator. Returns the count removed."""
        with self._lock:
            tokens = [t for t, entry in self._sessions.items() if entry["login"] == login]
            for token in tokens:
                del self._sessions[token]
            return len(tokens)

    def clear(self) -> None:
        """Drop every session (tests, emergency logout)."""
        with self._lock:
            self._sessions.clear()

    def stats(self) -> Dict[str, Any]:
        """Session counters for the /api info endpoint."""
        with self._lock:
            now = time.time()
            expired_count = sum(
                1 for entry in self._sessions.values()
                if now > entry["expires_at"]
            )
            return {
                "size": len(self._sessions),
                "max_size": self.max_size,
                "expired_count": expired_count,
            }


# Global session store (singleton)
session_store = SessionStore(
    max_size=settings.SESSION_MAX_ENTRIES,
    idle_timeout=settings.SESSION_IDLE_TIMEOUT_S,
)

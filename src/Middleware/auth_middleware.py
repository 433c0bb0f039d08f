# src/Middleware/auth_middleware.py

"""
Session gate for the dashboard API.

Every /api/... request must carry a valid session cookie, except the public
paths below. Rejected requests never reach a route handler.

Public:
- /api                 API information
- /api/login           credential check
- /api/test            liveness probe
- /api/mobile/...      device ingestion (terminals hold no session)

On success the administrator login is stored on request.state.admin_login.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from src.Core.config import settings
from src.Services.session_store import session_store


class SessionGateMiddleware(BaseHTTPMiddleware):

    PROTECTED_PREFIX = "/api"
    PUBLIC_PATHS = {"/api", "/api/login", "/api/test"}
    PUBLIC_PREFIXES = ("/api/mobile/",)

    def _is_public(self, path: str) -> bool:
        normalized = path.rstrip("/") or "/"
        if normalized in self.PUBLIC_PATHS:
            return True
        if not (normalized == self.PROTECTED_PREFIX or normalized.startswith(self.PROTECTED_PREFIX + "/")):
            return True
        return any(normalized.startswith(prefix) or normalized + "/" == prefix for prefix in self.PUBLIC_PREFIXES)

    async def dispatch(self, request: Request, call_next):
        # CORS preflight carries no cookies
        if request.method == "OPTIONS" or self._is_public(request.url.path):
            return await call_next(request)

        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        login = session_store.get(token)

        if not login:
            return JSONResponse(status_code=401, content={"error": "Authentication required"})

        request.state.admin_login = login
        return await call_next(request)

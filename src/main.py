"""
src/main.py
============================================
FastAPI Application for EMS Device Monitoring
============================================

Entry point of the backend that collects action logs from EMS field
terminals and serves them to the administrator dashboard.

Architecture Overview:
---------------------
- Device API: /api/mobile/* receives log records from terminals (no session)
- Dashboard API: /api/* behind a cookie session gate, scoped per administrator
  by the stations they were granted
- WebSocket: live operational log stream on /logs
- Health: /health probes the database

Run:
    uvicorn src.main:app --host 0.0.0.0 --port 8000
"""

# Environment Configuration
from dotenv import load_dotenv
import os
load_dotenv()

# FastAPI Core
from fastapi import FastAPI, WebSocket
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from src.Core.config import settings
from src.Controller.Routes import auth, devices, logs, mobile, reference
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import asyncio

# WebSocket Management (operational logs)
from src.Core import log_ws

# Database
from src.DB.database import check_db_connection, create_all_tables

# Sessions
from src.Middleware.auth_middleware import SessionGateMiddleware
from src.Services.session_store import session_store

# ============================================================
# DEPLOYMENT CONFIGURATION #1: ROOT PATH HANDLING
# ============================================================
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import RedirectResponse

# Extract root path for subdirectory deployment (e.g., /ems)
ROOT_PATH = os.getenv("ROOT_PATH", "").strip()
if ROOT_PATH:
    if not ROOT_PATH.startswith("/"):
        ROOT_PATH = "/" + ROOT_PATH
    if ROOT_PATH.endswith("/"):
        ROOT_PATH = ROOT_PATH[:-1]


class StripPrefixMiddleware(BaseHTTPMiddleware):
    """
    Removes ROOT_PATH from incoming request paths.

    Example:
        ROOT_PATH = "/ems"
        Incoming request: /ems/api/logs/latest
        FastAPI receives: /api/logs/latest
    """

    def __init__(self, app, prefix: str):
        super().__init__(app)
        self.prefix = prefix

    async def dispatch(self, request, call_next):
        if self.prefix:
            path = request.url.path

            if path == self.prefix:
                return RedirectResponse(url=self.prefix + "/", status_code=307)

            if path.startswith(self.prefix + "/"):
                request.scope["path"] = path[len(self.prefix):] or "/"

        return await call_next(request)


# ============================================================
# DEPLOYMENT CONFIGURATION #2: DYNAMIC CORS CONFIGURATION
# ============================================================
from fastapi.middleware.cors import CORSMiddleware


def _parse_origins(csv_value: str):
    """
    Parse comma-separated origins.

    Examples:
        "*" → (True, ["*"])
        "https://app.com,https://admin.app.com" → (False, ["https://app.com", "https://admin.app.com"])
        "" → (False, [])
    """
    if not csv_value:
        return (False, [])

    csv_value = csv_value.strip()

    if csv_value == "*":
        return (True, ["*"])

    origins = [origin.strip() for origin in csv_value.split(",") if origin.strip()]
    return (False, origins)


_http_allow_all, _http_origins = _parse_origins(
    os.getenv("HTTP_ALLOWED_ORIGINS", "*")
)
_ws_allow_all, _ws_origins = _parse_origins(
    os.getenv("WS_ALLOWED_ORIGINS", "*")
)


# ============================================================
# APPLICATION LIFESPAN MANAGEMENT
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
        1. Hand the event loop to the log WebSocket manager
        2. Probe the database
        3. Create missing tables (DB_AUTO_CREATE)
    """
    loop = asyncio.get_running_loop()
    log_ws.log_ws_manager.set_main_loop(loop)

    ok, error = check_db_connection()
    if not ok:
        print(f"[STARTUP] ❌ Database unreachable: {error}")
    elif settings.DB_AUTO_CREATE:
        create_all_tables()
    else:
        print("[STARTUP] ⚠️  DB_AUTO_CREATE disabled, run `alembic upgrade head`")

    print("[STARTUP] ✅ Application initialization complete")

    yield

    print("[SHUTDOWN] 🛑 Application shutdown initiated")


# ============================================================
# APPLICATION INSTANCE CREATION
# ============================================================
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    lifespan=lifespan
)


# ============================================================
# ERROR ENVELOPE: { "error": "<message>" }
# ============================================================
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc: Exception):
    log_ws.log_from_thread(f"[ERROR] {request.method} {request.url.path}: {exc}", "error")
    return JSONResponse(status_code=500, content={"error": str(exc)})


# ============================================================
# MIDDLEWARE REGISTRATION
# ============================================================
# IMPORTANT: Middlewares are executed in REVERSE order of registration
# (last registered = first executed)

# 1. Session gate (innermost, sees the stripped path)
app.add_middleware(SessionGateMiddleware)

# 2. CORS (wraps the gate so 401 responses carry CORS headers too)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_http_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 3. Root Path Handler (outermost)
if ROOT_PATH:
    app.add_middleware(StripPrefixMiddleware, prefix=ROOT_PATH)


# ============================================================
# HEALTH CHECK ENDPOINT
# ============================================================
@app.get("/health")
def health():
    """
    Database reachability probe for load balancers and orchestrators.

    Returns:
        200 {"status": "UP", ...} or 500 {"status": "DOWN", ...}
    """
    ok, error = check_db_connection()
    if ok:
        return {"status": "UP", "message": "Database is reachable"}
    return JSONResponse(
        status_code=500,
        content={"status": "DOWN", "message": f"Database is unreachable: {error}"},
    )


# ============================================================
# REST API ROUTE REGISTRATION
# ============================================================
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(devices.router, prefix="/api", tags=["devices"])
app.include_router(logs.router, prefix="/api/logs", tags=["logs"])
app.include_router(reference.router, prefix="/api", tags=["reference"])
app.include_router(mobile.router, prefix="/api/mobile", tags=["mobile"])


# ============================================================
# WEBSOCKET ENDPOINTS
# ============================================================
async def socket_handler(ws: WebSocket, manager):
    """
    Origin and session check, then register and pump messages until the
    client disconnects.
    """
    origin = ws.headers.get("origin")

    if (not _ws_allow_all) and (origin not in _ws_origins):
        print(f"[WS] ❌ Connection rejected - unauthorized origin: {origin}")
        await ws.close(code=1008)
        return

    login = session_store.get(ws.cookies.get(settings.SESSION_COOKIE_NAME))
    if not login:
        print("[WS] ❌ Connection rejected - no valid session")
        await ws.close(code=1008)
        return

    await manager.register(ws)

    try:
        while True:
            message = await ws.receive_text()
            await manager.handle_message(ws, message)
    except Exception as e:
        print(f"[WS] Connection closed: {e}")
    finally:
        manager.unregister(ws)


@app.websocket("/logs")
async def websocket_logs(ws: WebSocket):
    """
    Live operational log stream for authenticated administrators.

    Message Format:
        {
            "msg_type": "log" | "warning" | "error",
            "message": "[INGEST] New device: D1 (77/S1)",
            "timestamp": "2025-12-01T10:30:00+00:00"
        }
    """
    await socket_handler(ws, log_ws.log_ws_manager)


# ============================================================
# API INFORMATION ENDPOINTS
# ============================================================
@app.get("/api")
def api_info():
    """API discovery and runtime status."""
    return {
        "status": "online",
        "name": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
        "sessions": session_store.stats(),
        "endpoints": {
            "auth": "/api/login, /api/logout, /api/me",
            "logs": "/api/logs/*",
            "devices": "/api/devices",
            "mobile": "/api/mobile/*",
            "live_logs": "/logs (WebSocket)",
            "health": "/health",
        },
    }


@app.get("/api/test")
def api_test():
    return {
        "message": "API is up",
        "status": "success",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

#src/Controller/deps.py

from typing import Generator, List, Optional
from fastapi import Depends, HTTPException, Query, Request
from src.Core.config import settings
from src.DB.session import SessionLocal
from src.Schemas.log_entry import LogFilters
from src.Services.session_store import session_store


def get_DB() -> Generator:
    DB = SessionLocal()
    try:
        yield DB
    finally:
        DB.close()


"""
get_current_login resolves the administrator behind the request.
The session gate middleware already stores it on request.state for /api paths;
the cookie lookup covers routes mounted outside the gate.
"""
def get_current_login(request: Request) -> Optional[str]:
    login = getattr(request.state, "admin_login", None)
    if login:
        return login
    return session_store.get(request.cookies.get(settings.SESSION_COOKIE_NAME))


def require_login(login: Optional[str] = Depends(get_current_login)) -> str:
    if not login:
        raise HTTPException(status_code=401, detail="Authentication required")
    return login


def get_log_filters(
    region_code: List[str] = Query(default=[]),
    smp_code: List[str] = Query(default=[]),
    team_number: List[str] = Query(default=[]),
    action_text: List[str] = Query(default=[]),
    app_version: List[str] = Query(default=[]),
    device_codes: List[str] = Query(default=[], alias="device_code"),
) -> LogFilters:
    """Repeated query parameters, e.g. ?region_code=77&region_code=50"""
    return LogFilters(
        region_code=region_code,
        smp_code=smp_code,
        team_number=team_number,
        action_text=action_text,
        app_version=app_version,
        device_code=device_codes,
    )


class Pagination:
    def __init__(
        self,
        offset: int = Query(0, ge=0, description="Rows to skip"),
        limit: int = Query(
            settings.PAGE_DEFAULT_LIMIT, ge=1, le=settings.PAGE_MAX_LIMIT,
            description="Page size",
        ),
    ):
        self.offset = offset
        self.limit = limit

# src/Controller/Routes/auth.py

"""
Administrator Authentication REST API

Endpoints:
- POST /api/login      Verify credentials, open a session (HttpOnly cookie)
- POST /api/logout     Close the current session
- GET  /api/me         Current administrator (never the password hash)
- GET  /api/me/smps    Stations granted to the current administrator

Unknown login and wrong password produce the same 401 message so the
endpoint cannot be used to enumerate administrators.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session
from typing import List
from src.Controller.deps import get_DB, require_login
from src.Core.config import settings
from src.Core.log_ws import log_from_thread
from src.Repositories import administrator as admin_repo
from src.Repositories import station as station_repo
from src.Schemas import auth as auth_schema
from src.Schemas import station as station_schema
from src.Services.passwords import verify_password
from src.Services.session_store import session_store

router = APIRouter()

INVALID_CREDENTIALS = "Invalid login or password"


# ==========================================================
# 📌 Login / Logout
# ==========================================================

@router.post("/login", response_model=auth_schema.Login_response)
def login(
    credentials: auth_schema.Login_request,
    request: Request,
    response: Response,
    db: Session = Depends(get_DB),
):
    admin = admin_repo.get_admin_by_login(db, credentials.login)

    if admin is None or not verify_password(credentials.password, admin.password_hash):
        log_from_thread(f"[AUTH] Failed login for '{credentials.login}'", "warning")
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

    # A fresh token on every login; the previous one (if any) dies
    session_store.delete(request.cookies.get(settings.SESSION_COOKIE_NAME))
    token = session_store.create(admin.login)

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
        max_age=settings.SESSION_IDLE_TIMEOUT_S,
    )
    log_from_thread(f"[AUTH] Administrator '{admin.login}' logged in")
    return {"message": "Login successful", "login": admin.login}


@router.post("/logout")
def logout(request: Request, response: Response, login: str = Depends(require_login)):
    session_store.delete(request.cookies.get(settings.SESSION_COOKIE_NAME))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    log_from_thread(f"[AUTH] Administrator '{login}' logged out")
    return {"message": "Logout successful"}


# ==========================================================
# 📌 Current Identity
# ==========================================================

@router.get("/me", response_model=auth_schema.Admin_get)
def get_me(login: str = Depends(require_login), db: Session = Depends(get_DB)):
    admin = admin_repo.get_admin_by_login(db, login)
    if admin is None:
        # Session outlived the account
        session_store.delete_login(login)
        raise HTTPException(status_code=401, detail="Authentication required")
    return admin


@router.get("/me/smps", response_model=List[station_schema.Station_get])
def get_my_stations(login: str = Depends(require_login), db: Session = Depends(get_DB)):
    return station_repo.get_stations_for_login(db, login)

"""
EMS Device Monitor Test Suite - Shared Fixtures
conftest.py

The application reads its settings at import time, so the environment is
prepared here before anything from src/ is imported: a throwaway SQLite file
and the cheapest bcrypt cost.

Run:
    pip install -e ".[test]"
    pytest -v --tb=short
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="ems-monitor-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ["PASSWORD_BCRYPT_ROUNDS"] = "4"
os.environ["DB_AUTO_CREATE"] = "true"

import pytest
from fastapi.testclient import TestClient

from src.DB.database import create_all_tables, drop_all_tables
from src.DB.session import SessionLocal
from src.Repositories import administrator as admin_repo
from src.Repositories import station as station_repo
from src.Repositories import station_grant as grant_repo
from src.Schemas.mobile import Mobile_log_request
from src.Services.ingestion import ingest_single
from src.Services.passwords import hash_password
from src.Services.session_store import session_store


DEFAULT_PASSWORD = "secret-pass"


# ---------------------------------------------------------------------------
# Schema / state reset
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_database():
    drop_all_tables()
    create_all_tables()
    session_store.clear()
    yield
    session_store.clear()


@pytest.fixture()
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture()
def client():
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Data helpers
# ---------------------------------------------------------------------------

@pytest.fixture()
def make_admin(db):
    """
    Create an administrator with station grants.

        make_admin("admin77", grants=[("77", "S1")])
    """
    def _make(login="admin77", password=DEFAULT_PASSWORD, grants=()):
        admin_repo.create_admin(db, login, hash_password(password))
        for region_code, smp_code in grants:
            station_repo.ensure_station(db, region_code, smp_code)
            grant_repo.add_grant(db, login, region_code, smp_code)
        return login

    return _make


@pytest.fixture()
def seed_log(db):
    """
    Ingest one record through the real pipeline.

        seed_log("D1", "77", "S1", "A1", "2024-01-15T10:00:00Z")
    """
    def _seed(device_code, region_code, smp_code, action_code, when,
              app_version="1.0", team_number="T1", action_text=None):
        record = Mobile_log_request.model_validate({
            "region_code": region_code,
            "smp_code": smp_code,
            "team_number": team_number,
            "device_code": device_code,
            "app_version": app_version,
            "action_code": action_code,
            "action_text": action_text,
            "datetime": when,
        })
        return ingest_single(db, record)

    return _seed


@pytest.fixture()
def login_as(client, make_admin):
    """
    Create an administrator and log the test client in as them.

        login_as("admin77", grants=[("77", "S1")])
    """
    def _login(login="admin77", grants=(("77", "S1"),), password=DEFAULT_PASSWORD):
        make_admin(login, password=password, grants=grants)
        resp = client.post("/api/login", json={"login": login, "password": password})
        assert resp.status_code == 200, resp.text
        return resp

    return _login

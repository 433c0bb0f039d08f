"""
Session gate, login/logout and identity endpoints.

Run:
    pytest tests/test_api_auth.py -v
"""

import pytest

PASSWORD = "secret-pass"


PROTECTED = [
    ("get", "/api/me"),
    ("get", "/api/me/smps"),
    ("post", "/api/logout"),
    ("get", "/api/devices"),
    ("get", "/api/logs/latest"),
    ("get", "/api/logs/unique-values"),
    ("get", "/api/logs/device/D1"),
    ("get", "/api/logs/device/D1/unique-values"),
    ("get", "/api/smp"),
    ("get", "/api/actions"),
    ("get", "/api/admins"),
    ("get", "/api/admins-smp"),
]


@pytest.mark.parametrize("method,path", PROTECTED)
def test_protected_paths_require_a_session(client, method, path):
    resp = getattr(client, method)(path)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required"}


@pytest.mark.parametrize("path", ["/api", "/api/test", "/api/mobile/test", "/health"])
def test_public_paths(client, path):
    assert client.get(path).status_code == 200


def test_forged_cookie_is_rejected(client):
    client.cookies.set("session", "forged-token")
    assert client.get("/api/me").status_code == 401


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

def test_login_sets_an_httponly_session_cookie(client, make_admin):
    make_admin("admin77", password=PASSWORD)

    resp = client.post("/api/login", json={"login": "admin77", "password": PASSWORD})

    assert resp.status_code == 200
    assert resp.json() == {"message": "Login successful", "login": "admin77"}
    set_cookie = resp.headers["set-cookie"].lower()
    assert set_cookie.startswith("session=")
    assert "httponly" in set_cookie


def test_unknown_login_and_wrong_password_look_the_same(client, make_admin):
    make_admin("admin77", password=PASSWORD)

    unknown = client.post("/api/login", json={"login": "ghost", "password": PASSWORD})
    wrong = client.post("/api/login", json={"login": "admin77", "password": "nope"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"error": "Invalid login or password"}


def test_corrupted_hash_cannot_log_in(client, db):
    from src.Repositories import administrator as admin_repo

    admin_repo.create_admin(db, "broken", "not-a-bcrypt-hash")
    resp = client.post("/api/login", json={"login": "broken", "password": "anything"})
    assert resp.status_code == 401


@pytest.mark.parametrize("body", [{}, {"login": "admin77"}, {"login": "", "password": "x"}])
def test_malformed_login_body_is_a_bad_request(client, body):
    resp = client.post("/api/login", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"


# ---------------------------------------------------------------------------
# Identity / logout
# ---------------------------------------------------------------------------

def test_me_never_exposes_the_password_hash(client, login_as):
    login_as("admin77")

    body = client.get("/api/me").json()

    assert body["login"] == "admin77"
    assert "created_at" in body
    assert "password_hash" not in body


def test_me_smps_lists_granted_stations(client, login_as):
    login_as("admin77", grants=[("77", "S2"), ("77", "S1")])

    assert client.get("/api/me/smps").json() == [
        {"region_code": "77", "smp_code": "S1"},
        {"region_code": "77", "smp_code": "S2"},
    ]


def test_logout_ends_the_session(client, login_as):
    login_as("admin77")
    assert client.get("/api/me").status_code == 200

    assert client.post("/api/logout").status_code == 200
    client.cookies.clear()

    assert client.get("/api/me").status_code == 401


def test_logged_out_token_is_dead_server_side(client, login_as):
    login_as("admin77")
    token = client.cookies.get("session")

    client.post("/api/logout")
    client.cookies.set("session", token)

    assert client.get("/api/me").status_code == 401


# ---------------------------------------------------------------------------
# Reference listings
# ---------------------------------------------------------------------------

def test_reference_listings(client, login_as, seed_log):
    login_as("admin77", grants=[("77", "S1")])
    seed_log("D1", "77", "S1", "A1", "2024-01-15T10:00:00Z", action_text="Arrived")

    admins = client.get("/api/admins").json()
    assert [a["login"] for a in admins] == ["admin77"]
    assert all("password_hash" not in a for a in admins)

    assert client.get("/api/admins-smp").json() == [
        {"login": "admin77", "region_code": "77", "smp_code": "S1"}
    ]
    assert client.get("/api/smp").json() == [{"region_code": "77", "smp_code": "S1"}]
    assert client.get("/api/actions").json() == [
        {"action_code": "A1", "app_version": "1.0", "action_text": "Arrived"}
    ]

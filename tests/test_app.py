"""
Application-level behaviour: health probe, info endpoints, error envelope
and the live log WebSocket.

Run:
    pytest tests/test_app.py -v
"""

import pytest
from starlette.websockets import WebSocketDisconnect

import src.main as main_module
from src.Core.log_ws import log_from_thread


def test_health_up(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "UP"


def test_health_down(client, monkeypatch):
    monkeypatch.setattr(main_module, "check_db_connection", lambda: (False, "connection refused"))

    resp = client.get("/health")

    assert resp.status_code == 500
    assert resp.json()["status"] == "DOWN"
    assert "connection refused" in resp.json()["message"]


def test_api_info(client):
    body = client.get("/api").json()
    assert body["status"] == "online"
    assert body["sessions"]["size"] == 0


def test_unknown_route_uses_the_error_envelope(client, login_as):
    login_as("admin77")
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_parse_origins():
    assert main_module._parse_origins("*") == (True, ["*"])
    assert main_module._parse_origins("") == (False, [])
    assert main_module._parse_origins("https://a.test, https://b.test") == (
        False, ["https://a.test", "https://b.test"]
    )


# ---------------------------------------------------------------------------
# /logs WebSocket
# ---------------------------------------------------------------------------

def test_log_socket_requires_a_session(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/logs") as ws:
            ws.receive_text()


def test_log_socket_streams_operational_events(client, login_as):
    login_as("admin77")

    with client.websocket_connect("/logs") as ws:
        ws.send_text("ping")
        assert ws.receive_json() == {"msg_type": "pong"}

        log_from_thread("[TEST] hello", "warning")
        message = ws.receive_json()

    assert message["msg_type"] == "warning"
    assert message["message"] == "[TEST] hello"
    assert "timestamp" in message

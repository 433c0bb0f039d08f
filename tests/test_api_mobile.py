"""
Device-facing ingestion endpoints.

Run:
    pytest tests/test_api_mobile.py -v
"""


def body(**overrides):
    payload = {
        "region_code": "77",
        "smp_code": "S1",
        "team_number": "T1",
        "device_code": "D1",
        "app_version": "1.0",
        "action_code": "A1",
        "action_text": "Arrived",
        "datetime": "2024-01-15T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def test_single_log_needs_no_session(client):
    resp = client.post("/api/mobile/log", json=body())

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["data"]["device_code"] == "D1"
    assert data["data"]["action_code"] == "A1"
    assert data["data"]["datetime"].startswith("2024-01-15T10:00:00")


def test_single_log_validation_error(client):
    payload = body()
    del payload["device_code"]

    resp = client.post("/api/mobile/log", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"


def test_single_log_field_too_long(client):
    resp = client.post("/api/mobile/log", json=body(action_code="X" * 21))
    assert resp.status_code == 400


def test_duplicate_single_log_conflicts(client):
    assert client.post("/api/mobile/log", json=body()).status_code == 200

    resp = client.post("/api/mobile/log", json=body())

    assert resp.status_code == 409
    assert "already exists" in resp.json()["error"]


def test_batch_partial_failure(client):
    resp = client.post("/api/mobile/logs/batch", json=[
        body(device_code="D1"),
        body(device_code="D2", region_code=""),
        body(device_code="D3"),
    ])

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert (data["processed"], data["succeeded"], data["failed"]) == (3, 2, 1)
    assert [r["success"] for r in data["results"]] == [True, False, True]


def test_batch_wrapped_in_logs(client):
    resp = client.post("/api/mobile/logs/batch", json={"logs": [body(device_code="D5")]})
    assert resp.status_code == 200
    assert resp.json()["succeeded"] == 1


def test_empty_batch_is_a_bad_request(client):
    resp = client.post("/api/mobile/logs/batch", json=[])
    assert resp.status_code == 400
    assert resp.json() == {"error": "No logs to add"}


def test_batch_with_wrong_shape(client):
    resp = client.post("/api/mobile/logs/batch", json={"records": []})
    assert resp.status_code == 400


def test_ingested_logs_show_up_for_the_station_admin(client, login_as):
    client.post("/api/mobile/log", json=body())
    login_as("admin77", grants=[("77", "S1")])

    rows = client.get("/api/logs/latest").json()["data"]
    assert [(r["device_code"], r["action_text"]) for r in rows] == [("D1", "Arrived")]

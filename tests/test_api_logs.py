"""
Dashboard log endpoints over HTTP: envelope, query parameters and the
404/403 split for device history.

Run:
    pytest tests/test_api_logs.py -v
"""

import pytest


@pytest.fixture()
def seeded(client, login_as, seed_log):
    login_as("admin77", grants=[("77", "S1")])
    seed_log("D1", "77", "S1", "A1", "2024-01-15T10:00:00Z", app_version="1.0")
    seed_log("D1", "77", "S1", "A2", "2024-01-15T11:00:00Z", app_version="1.0")
    seed_log("D2", "77", "S1", "A1", "2024-01-15T09:00:00Z", app_version="2.0")
    seed_log("D9", "50", "S1", "A1", "2024-01-15T12:00:00Z")
    return client


def test_latest_envelope(seeded):
    body = seeded.get("/api/logs/latest").json()

    assert set(body) == {"data", "total", "totalUnfiltered", "hasMore"}
    assert [row["device_code"] for row in body["data"]] == ["D1", "D2"]
    assert body["total"] == 2
    assert body["totalUnfiltered"] == 2
    assert body["hasMore"] is False
    assert set(body["data"][0]) == {
        "action_code", "app_version", "device_code", "datetime",
        "region_code", "smp_code", "team_number", "action_text",
    }


def test_latest_paging_params(seeded):
    body = seeded.get("/api/logs/latest", params={"offset": 0, "limit": 1}).json()
    assert len(body["data"]) == 1
    assert body["hasMore"] is True


def test_repeated_filter_params(seeded):
    resp = seeded.get(
        "/api/logs/latest",
        params=[("app_version", "1.0"), ("app_version", "2.0"), ("device_code", "D2")],
    )
    body = resp.json()
    assert [row["device_code"] for row in body["data"]] == ["D2"]
    assert body["total"] == 1
    assert body["totalUnfiltered"] == 2


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 100000}, {"offset": -1}, {"limit": "many"}])
def test_bad_paging_params_are_rejected(seeded, params):
    resp = seeded.get("/api/logs/latest", params=params)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"


def test_unique_values(seeded):
    body = seeded.get("/api/logs/unique-values", params={"app_version": "1.0"}).json()
    assert body["device_code"] == ["D1"]
    assert body["region_code"] == ["77"]


def test_device_history(seeded):
    body = seeded.get("/api/logs/device/D1").json()
    assert [row["action_code"] for row in body["data"]] == ["A2", "A1"]
    assert body["total"] == 2


def test_device_unique_values(seeded):
    body = seeded.get("/api/logs/device/D1/unique-values").json()
    assert body["action_text"] == ["Action A1", "Action A2"]


def test_device_code_filter_on_latest(seeded):
    body = seeded.get("/api/logs/latest", params={"device_code": "D1"}).json()
    assert [row["device_code"] for row in body["data"]] == ["D1"]
    assert body["totalUnfiltered"] == 2


def test_device_code_filter_next_to_the_path_device(seeded):
    same = seeded.get("/api/logs/device/D1", params={"device_code": "D1"}).json()
    other = seeded.get("/api/logs/device/D1", params={"device_code": "D2"}).json()

    assert same["total"] == 2
    assert other["data"] == []
    assert other["total"] == 0
    assert other["totalUnfiltered"] == 2


def test_device_code_filter_on_device_unique_values(seeded):
    resp = seeded.get("/api/logs/device/D1/unique-values", params={"device_code": "D1"})
    assert resp.status_code == 200
    assert resp.json()["device_code"] == ["D1"]


@pytest.mark.parametrize("path", ["/api/logs/device/{}", "/api/logs/device/{}/unique-values"])
def test_unknown_device_is_404(seeded, path):
    resp = seeded.get(path.format("NOPE"))
    assert resp.status_code == 404
    assert "error" in resp.json()


@pytest.mark.parametrize("path", ["/api/logs/device/{}", "/api/logs/device/{}/unique-values"])
def test_device_outside_scope_is_403(seeded, path):
    resp = seeded.get(path.format("D9"))
    assert resp.status_code == 403
    assert "error" in resp.json()


def test_devices_listing_is_scoped(seeded):
    assert [d["device_code"] for d in seeded.get("/api/devices").json()] == ["D1", "D2"]
    assert seeded.get("/api/devices", params={"region": "50"}).json() == []
    assert [d["device_code"] for d in seeded.get("/api/devices", params={"smp": "S1"}).json()] == ["D1", "D2"]


def test_admin_without_grants_sees_nothing(client, login_as, seed_log):
    seed_log("D1", "77", "S1", "A1", "2024-01-15T10:00:00Z")
    login_as("lonely", grants=[])

    body = client.get("/api/logs/latest").json()
    assert body == {"data": [], "total": 0, "totalUnfiltered": 0, "hasMore": False}
    assert client.get("/api/devices").json() == []

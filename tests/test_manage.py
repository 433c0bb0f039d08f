"""
Administration CLI.

Run:
    pytest tests/test_manage.py -v
"""

from src import manage
from src.Models.station import Station
from src.Repositories import station_grant as grant_repo


def test_create_admin_then_log_in(client):
    assert manage.main(["create-admin", "root", "--password", "pw-123"]) == 0

    resp = client.post("/api/login", json={"login": "root", "password": "pw-123"})
    assert resp.status_code == 200


def test_create_admin_twice_fails(capsys):
    assert manage.main(["create-admin", "root", "--password", "pw"]) == 0
    assert manage.main(["create-admin", "root", "--password", "pw"]) == 1
    assert "already exists" in capsys.readouterr().out


def test_grant_creates_missing_station(db):
    manage.main(["create-admin", "root", "--password", "pw"])

    assert manage.main(["grant", "root", "77", "S1"]) == 0
    assert db.get(Station, ("77", "S1")) is not None
    assert grant_repo.get_grant_pairs(db, "root") == [("77", "S1")]

    # granting again is harmless
    assert manage.main(["grant", "root", "77", "S1"]) == 0


def test_grant_to_unknown_admin_fails():
    assert manage.main(["grant", "ghost", "77", "S1"]) == 1


def test_revoke(db):
    manage.main(["create-admin", "root", "--password", "pw"])
    manage.main(["grant", "root", "77", "S1"])

    assert manage.main(["revoke", "root", "77", "S1"]) == 0
    assert grant_repo.get_grant_pairs(db, "root") == []
    assert manage.main(["revoke", "root", "77", "S1"]) == 1


def test_set_password(client):
    manage.main(["create-admin", "root", "--password", "old"])
    assert manage.main(["set-password", "root", "--password", "new"]) == 0

    assert client.post("/api/login", json={"login": "root", "password": "old"}).status_code == 401
    assert client.post("/api/login", json={"login": "root", "password": "new"}).status_code == 200


def test_init_db():
    assert manage.main(["init-db"]) == 0

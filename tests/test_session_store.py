"""
In-memory session store: token lifecycle, sliding expiry and LRU eviction.

Run:
    pytest tests/test_session_store.py -v
"""

import pytest

from src.Services import session_store as session_store_module
from src.Services.session_store import SessionStore


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now


@pytest.fixture()
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(session_store_module.time, "time", fake)
    return fake


def test_create_and_get():
    store = SessionStore()
    token = store.create("admin77")
    assert token
    assert store.get(token) == "admin77"


def test_tokens_are_unique():
    store = SessionStore()
    assert store.create("admin77") != store.create("admin77")


@pytest.mark.parametrize("token", [None, "", "unknown-token"])
def test_unknown_tokens_resolve_to_nothing(token):
    assert SessionStore().get(token) is None


def test_idle_session_expires(clock):
    store = SessionStore(idle_timeout=10)
    token = store.create("admin77")

    clock.now += 11
    assert store.get(token) is None
    assert store.stats()["size"] == 0


def test_activity_slides_the_expiry(clock):
    store = SessionStore(idle_timeout=10)
    token = store.create("admin77")

    clock.now += 8
    assert store.get(token) == "admin77"
    clock.now += 8
    assert store.get(token) == "admin77"
    clock.now += 11
    assert store.get(token) is None


def test_least_recently_used_session_is_evicted():
    store = SessionStore(max_size=2)
    first = store.create("a")
    second = store.create("b")

    store.get(first)
    third = store.create("c")

    assert store.get(second) is None
    assert store.get(first) == "a"
    assert store.get(third) == "c"


def test_delete():
    store = SessionStore()
    token = store.create("admin77")
    assert store.delete(token) is True
    assert store.delete(token) is False
    assert store.get(token) is None


def test_delete_login_drops_every_session_of_that_admin():
    store = SessionStore()
    tokens = [store.create("admin77") for _ in range(3)]
    other = store.create("admin50")

    assert store.delete_login("admin77") == 3
    assert all(store.get(t) is None for t in tokens)
    assert store.get(other) == "admin50"

"""
API Endpoint tests for the session service.

Tests cover:
- POST /session - Session creation and cookie binding
- GET /session - Session lookup through the middleware
- GET/PUT /session/values/{key} - Value reads and saves
- GET /health, GET /healthz - Health probes

These tests use FastAPI TestClient with an in-memory store wired onto
app.state, so no Redis is required.
"""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from sessionvault.main import SESSION_REQUIRED, app
from sessionvault.modules.session import (
    Session,
    SessionFactory,
    SignedCookieCodec,
    StoreError,
)
from sessionvault.modules.storage import InMemoryStore


@pytest.fixture
def store():
    return InMemoryStore()


def install(manager, storage=None):
    app.state.session_manager = manager
    app.state.storage = storage


@pytest.fixture
def signed_client(store):
    """TestClient with a signed-cookie manager."""
    install(SessionFactory.build_signed(store, secret="topsecret"))
    yield TestClient(app)
    install(None)


@pytest.fixture
def plain_client(store):
    """TestClient with a plain-cookie manager."""
    install(SessionFactory.build_plain(store, session_duration=timedelta(hours=1)))
    yield TestClient(app)
    install(None)


def test_create_session_sets_signed_cookie(signed_client):
    response = signed_client.post("/session")

    assert response.status_code == 201
    body = response.json()
    cookie = response.cookies["session"]
    assert SignedCookieCodec("topsecret").decode(cookie) == body["session_id"]
    assert body["values"] == {}


def test_session_lifecycle_with_cookie(signed_client):
    """Test create, read, write and read back through the cookie."""
    created = signed_client.post("/session").json()

    current = signed_client.get("/session")
    assert current.status_code == 200
    assert current.json()["session_id"] == created["session_id"]

    saved = signed_client.put("/session/values/cart", json={"value": ["A1", "B2"]})
    assert saved.status_code == 200
    assert saved.json()["values"] == {"cart": ["A1", "B2"]}

    value = signed_client.get("/session/values/cart")
    assert value.status_code == 200
    assert value.json() == {"key": "cart", "value": ["A1", "B2"]}

    assert signed_client.get("/session/values/missing").status_code == 404


def test_plain_cookie_carries_raw_id(plain_client, store):
    response = plain_client.post("/session")

    session_id = response.json()["session_id"]
    assert response.cookies["session"] == session_id
    assert plain_client.get("/session").json()["session_id"] == session_id


def test_missing_cookie_is_unauthorized(signed_client):
    response = signed_client.get("/session")

    assert response.status_code == 401
    assert response.json() == SESSION_REQUIRED


@pytest.mark.parametrize(
    "cookie",
    [
        "",
        "garbage",
        "a-b-c",
        "%zz-abc",
        SignedCookieCodec("wrong").encode("someone-else"),
        SignedCookieCodec("topsecret").encode("evicted-session"),
    ],
)
def test_lookup_failures_are_indistinguishable(signed_client, cookie):
    """Test every lookup failure yields the same 401 body."""
    signed_client.cookies.set("session", cookie)

    response = signed_client.get("/session")

    assert response.status_code == 401
    assert response.json() == SESSION_REQUIRED


def test_put_without_session_is_unauthorized(signed_client, store):
    response = signed_client.put("/session/values/cart", json={"value": 1})

    assert response.status_code == 401
    assert len(store) == 0


def test_store_failure_on_create_returns_503():
    failing_store = AsyncMock()
    failing_store.store = AsyncMock(side_effect=StoreError("down"))
    install(SessionFactory.build_signed(failing_store, secret="topsecret"))
    try:
        response = TestClient(app).post("/session")
    finally:
        install(None)

    assert response.status_code == 503
    assert "set-cookie" not in response.headers


def test_store_failure_on_lookup_returns_503():
    failing_store = AsyncMock()
    failing_store.retrieve = AsyncMock(side_effect=StoreError("down"))
    install(SessionFactory.build_plain(failing_store, session_duration=timedelta(hours=1)))
    try:
        client = TestClient(app)
        client.cookies.set("session", "some-id")
        response = client.get("/session")
    finally:
        install(None)

    assert response.status_code == 503
    assert response.json() == {"error": "Session store unavailable"}


def test_corrupted_stored_session_is_unauthorized(plain_client, store):
    plain_client.post("/session")
    session_id = plain_client.cookies["session"]
    store._data[session_id] = (b"not json", None)

    response = plain_client.get("/session")

    assert response.status_code == 401
    assert response.json() == SESSION_REQUIRED


def test_saved_values_persist_in_store(plain_client, store):
    plain_client.post("/session")
    plain_client.put("/session/values/user", json={"value": {"name": "alice"}})
    session_id = plain_client.cookies["session"]

    stored = Session.from_bytes(asyncio.run(store.retrieve(session_id)))
    assert stored.get("user") == {"name": "alice"}


def test_healthz():
    response = TestClient(app).get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_with_memory_store(signed_client):
    response = signed_client.get("/health")

    assert response.status_code == 200
    assert response.json()["store"] == "memory"


def test_health_with_redis_storage(store):
    storage = AsyncMock()
    storage.ping = AsyncMock(return_value=False)
    install(SessionFactory.build_signed(store, secret="topsecret"), storage)
    try:
        response = TestClient(app).get("/health")
    finally:
        install(None)

    assert response.status_code == 503
    assert response.json()["store"] == "disconnected"


def test_health_before_startup():
    install(None)

    response = TestClient(app).get("/health")

    assert response.status_code == 503
    assert response.json()["modules"] == "not initialized"

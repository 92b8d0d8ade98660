"""
Session Middleware Unit Tests

Tests for Session, SessionManager and SessionRoute.
"""

import json
from typing import Optional

import pytest
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from cortexcache.middleware.session import Session, SessionManager, SessionRoute
from cortexcache.services.session_store import SessionStore


class InMemorySessionStore(SessionStore):
    """Session store keeping everything in a dict, for tests."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def find(self, token: str) -> Optional[str]:
        return self.data.get(token)

    async def commit(self, token: str, data: str, ttl_seconds: int) -> None:
        self.data[token] = data
        self.ttls[token] = ttl_seconds

    async def delete(self, token: str) -> None:
        self.data.pop(token, None)


class TestSession:
    """Tests for the Session object."""

    def test_new_session_is_unmodified(self):
        session = Session()
        assert session.token is None
        assert session.modified is False
        assert session.to_dict() == {}

    def test_put_marks_modified(self):
        session = Session()
        session.put("flash", "hello")
        assert session.modified is True
        assert session.get("flash") == "hello"
        assert session.exists("flash")

    def test_pop_returns_and_removes(self):
        session = Session(token="tok", data={"flash": "hello"})
        assert session.pop("flash") == "hello"
        assert session.modified is True
        assert not session.exists("flash")

    def test_pop_missing_key_leaves_session_clean(self):
        session = Session(token="tok", data={"other": 1})
        assert session.pop("flash", "") == ""
        assert session.modified is False

    def test_remove_and_clear(self):
        session = Session(data={"a": 1, "b": 2})
        session.remove("a")
        assert session.to_dict() == {"b": 2}
        session.clear()
        assert session.to_dict() == {}
        assert session.modified is True

    def test_clear_empty_session_is_noop(self):
        session = Session()
        session.clear()
        assert session.modified is False


class TestSessionManagerLoad:
    """Tests for SessionManager.load."""

    @pytest.mark.asyncio
    async def test_no_token(self):
        manager = SessionManager(InMemorySessionStore())
        session = await manager.load(None)
        assert session.token is None
        assert session.to_dict() == {}

    @pytest.mark.asyncio
    async def test_unknown_token(self):
        manager = SessionManager(InMemorySessionStore())
        session = await manager.load("unknown")
        assert session.token is None

    @pytest.mark.asyncio
    async def test_existing_token(self):
        store = InMemorySessionStore()
        store.data["tok"] = json.dumps({"flash": "hi"})
        manager = SessionManager(store)

        session = await manager.load("tok")

        assert session.token == "tok"
        assert session.get("flash") == "hi"
        assert session.modified is False

    @pytest.mark.asyncio
    async def test_corrupt_data_gives_empty_session(self):
        store = InMemorySessionStore()
        store.data["tok"] = "{not json"
        manager = SessionManager(store)

        session = await manager.load("tok")

        assert session.token is None
        assert session.to_dict() == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["[1]", '"flash"', "null", "42"])
    async def test_non_object_data_gives_empty_session(self, raw):
        """Valid JSON that is not an object is discarded like corrupt data"""
        store = InMemorySessionStore()
        store.data["tok"] = raw
        manager = SessionManager(store)

        session = await manager.load("tok")

        assert session.token is None
        assert session.to_dict() == {}
        assert session.pop("flash") is None


def _create_app(store: SessionStore) -> FastAPI:
    """Create a test app whose routes use the session layer."""
    app = FastAPI()
    app.state.session_manager = SessionManager(store, lifetime_seconds=600)
    router = APIRouter(route_class=SessionRoute)

    @router.get("/put")
    async def put(request: Request):
        request.state.session.put("flash", "saved")
        return PlainTextResponse("ok")

    @router.get("/pop")
    async def pop(request: Request):
        return PlainTextResponse(request.state.session.pop("flash", ""))

    @router.get("/read")
    async def read(request: Request):
        return PlainTextResponse(request.state.session.get("flash", ""))

    app.include_router(router)

    @app.get("/plain")
    async def plain(request: Request):
        return PlainTextResponse(str(hasattr(request.state, "session")))

    return app


class TestSessionRoute:
    """Tests for the session round trip through real requests."""

    def test_put_sets_cookie_and_commits(self):
        store = InMemorySessionStore()
        client = TestClient(_create_app(store))

        response = client.get("/put")

        assert response.status_code == 200
        token = response.cookies.get("session")
        assert token
        assert json.loads(store.data[token]) == {"flash": "saved"}
        assert store.ttls[token] == 600
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=lax" in set_cookie
        assert "max-age=600" in set_cookie
        assert response.headers["cache-control"] == 'no-cache="Set-Cookie"'

    def test_unmodified_session_sets_no_cookie(self):
        store = InMemorySessionStore()
        client = TestClient(_create_app(store))

        response = client.get("/read")

        assert "set-cookie" not in response.headers
        assert store.data == {}

    def test_vary_cookie_always_added(self):
        client = TestClient(_create_app(InMemorySessionStore()))

        response = client.get("/read")

        assert "Cookie" in response.headers["vary"]

    def test_flash_is_read_once(self):
        store = InMemorySessionStore()
        client = TestClient(_create_app(store))
        client.get("/put")

        first = client.get("/pop")
        second = client.get("/pop")

        assert first.text == "saved"
        assert second.text == ""
        # Emptied session is deleted from the store
        assert store.data == {}

    def test_routes_without_session_route_are_untouched(self):
        client = TestClient(_create_app(InMemorySessionStore()))

        response = client.get("/plain")

        assert response.text == "False"
        assert "vary" not in response.headers

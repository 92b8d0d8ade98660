"""
Session Middleware Module

Cookie-based sessions for the routes that need them. Only routes registered
with `SessionRoute` load and save session state; static files and the health
check never touch the session store.
"""

import json
import logging
import secrets
from typing import Any, Callable, Optional

from fastapi import Request, Response
from fastapi.routing import APIRoute

from cortexcache.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class Session:
    """
    Per-request session data

    Handlers read and write through this object; the manager decides
    whether anything needs to be persisted once the handler returns.
    """

    def __init__(self, token: Optional[str] = None, data: Optional[dict[str, Any]] = None):
        self.token = token
        self._data: dict[str, Any] = dict(data or {})
        self.modified = False

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.modified = True

    def pop(self, key: str, default: Any = None) -> Any:
        """Return a value and remove it from the session (e.g. flash messages)."""
        if key not in self._data:
            return default
        self.modified = True
        return self._data.pop(key)

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self.modified = True

    def exists(self, key: str) -> bool:
        return key in self._data

    def clear(self) -> None:
        if self._data:
            self._data.clear()
            self.modified = True

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


class SessionManager:
    """
    Session Manager

    Loads sessions from the cookie token and commits modified sessions
    back to the store.
    """

    def __init__(
        self,
        store: SessionStore,
        lifetime_seconds: int = 43200,
        cookie_name: str = "session",
        cookie_secure: bool = False,
    ):
        self.store = store
        self.lifetime_seconds = lifetime_seconds
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure

    async def load(self, token: Optional[str]) -> Session:
        """
        Load the session for a cookie token

        Unknown, expired or unreadable tokens yield a fresh empty session.
        """
        if not token:
            return Session()

        raw = await self.store.find(token)
        if raw is None:
            return Session()

        try:
            data = json.loads(raw)
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.warning("Discarding unreadable session data for token %s...", token[:8])
            return Session()

        return Session(token=token, data=data)

    async def save(self, session: Session, response: Response) -> None:
        """Persist a modified session and set (or expire) the cookie."""
        response.headers.add_vary_header("Cookie")

        if not session.modified:
            return

        if not session.to_dict():
            if session.token:
                await self.store.delete(session.token)
                response.delete_cookie(
                    self.cookie_name,
                    path="/",
                    secure=self.cookie_secure,
                    httponly=True,
                    samesite="lax",
                )
            return

        if session.token is None:
            session.token = secrets.token_urlsafe(32)

        await self.store.commit(
            session.token, json.dumps(session.to_dict()), self.lifetime_seconds
        )
        response.set_cookie(
            self.cookie_name,
            session.token,
            max_age=self.lifetime_seconds,
            path="/",
            secure=self.cookie_secure,
            httponly=True,
            samesite="lax",
        )
        response.headers["Cache-Control"] = 'no-cache="Set-Cookie"'


class SessionRoute(APIRoute):
    """
    Route class wrapping its endpoint with session load/save

    Use as `APIRouter(route_class=SessionRoute)`. The manager is read from
    `app.state.session_manager` and the session is exposed as `request.state.session`.
    """

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def session_route_handler(request: Request) -> Response:
            manager: SessionManager = request.app.state.session_manager
            session = await manager.load(request.cookies.get(manager.cookie_name))
            request.state.session = session

            response = await original_route_handler(request)
            await manager.save(session, response)
            return response

        return session_route_handler

"""
Cortex Cache Application Entry Point

FastAPI application main entry, including middleware, error handling and router registration.
"""

import logging
import traceback
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from jinja2 import TemplateError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Match, Mount

from cortexcache import __version__
from cortexcache.api import snippets_router
from cortexcache.api.render import TemplateRenderer
from cortexcache.common.errors import AppError
from cortexcache.config import Settings, get_settings
from cortexcache.db.redis import close_redis, init_redis
from cortexcache.db.session import AsyncSessionLocal, close_db, init_db
from cortexcache.logging_config import setup_logging
from cortexcache.middleware import (
    RecoverPanicMiddleware,
    RequestLoggingMiddleware,
    SecureHeadersMiddleware,
    SessionManager,
)
from cortexcache.scheduler import shutdown_scheduler, start_scheduler
from cortexcache.services import DatabaseSessionStore, RedisSessionStore

logger = logging.getLogger(__name__)

# Initialize logging configuration
setup_logging()


# Application Lifecycle Management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application Lifecycle Management

    Initialize database on startup, clean up resources on shutdown.
    """
    settings = get_settings()
    # Startup
    await init_db()
    if settings.SESSION_STORE_TYPE == "redis":
        await init_redis()
    start_scheduler()
    logger.info("%s %s started", settings.APP_NAME, __version__)
    yield
    # Shutdown
    shutdown_scheduler()
    if settings.SESSION_STORE_TYPE == "redis":
        await close_redis()
    await close_db()


def build_session_manager(settings: Settings) -> SessionManager:
    """Create the session manager for the configured store backend"""
    if settings.SESSION_STORE_TYPE == "redis":
        store = RedisSessionStore()
    else:
        store = DatabaseSessionStore(AsyncSessionLocal)
    return SessionManager(
        store,
        lifetime_seconds=settings.SESSION_LIFETIME_SECONDS,
        cookie_name=settings.SESSION_COOKIE_NAME,
        cookie_secure=settings.SESSION_COOKIE_SECURE,
    )


CANDIDATE_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
STATIC_METHODS = ("GET", "HEAD")


def _routing_scope(request: Request, method: str) -> dict:
    """
    Fresh scope for matching the request path with another method

    Mount dispatch rewrites root_path in place, so the application root
    path is restored here.
    """
    scope = request.scope
    return {
        "type": "http",
        "method": method,
        "path": scope["path"],
        "root_path": scope.get("app_root_path", scope.get("root_path", "")),
        "path_params": {},
    }


def allowed_methods(request: Request) -> list[str]:
    """
    Every method the application serves for the request path

    Each candidate method is tried against every top-level route, so routes
    nested in included routers are found whatever wrapper the router uses.
    Mounts match any method; static file mounts only serve GET and HEAD.
    """
    methods: set[str] = set()
    for route in request.app.router.routes:
        if isinstance(route, Mount) and isinstance(route.app, StaticFiles):
            match, _ = route.matches(_routing_scope(request, "GET"))
            if match != Match.NONE:
                methods.update(STATIC_METHODS)
            continue
        for method in CANDIDATE_METHODS:
            match, _ = route.matches(_routing_scope(request, method))
            if match == Match.FULL:
                methods.add(method)
    return sorted(methods)


def _status_response(status_code: int, headers: dict[str, str] | None = None) -> PlainTextResponse:
    return PlainTextResponse(
        HTTPStatus(status_code).phrase,
        status_code=status_code,
        headers=headers,
    )


def server_error(request: Request, exc: Exception) -> PlainTextResponse:
    """Log an internal failure with its traceback and send a generic 500."""
    logger.error(
        "Server error: %s\nPath: %s\nTraceback:\n%s",
        str(exc),
        request.url.path,
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    )
    return _status_response(500)


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error kind to a single response path."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """
        Handle application custom exceptions

        Clients only ever see the status text; details stay in the logs.
        """
        if exc.status_code >= 500:
            return server_error(request, exc)
        logger.debug("%s: %s (%s)", exc.error_type, exc.message, request.url.path)
        return _status_response(exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Routing errors (404, 405) and form parsing errors (400)."""
        headers = dict(exc.headers or {})
        if exc.status_code == 405:
            headers["Allow"] = ", ".join(allowed_methods(request))
        return _status_response(exc.status_code, headers=headers)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        return server_error(request, exc)

    @app.exception_handler(TemplateError)
    async def template_error_handler(request: Request, exc: TemplateError):
        return server_error(request, exc)


def create_app() -> FastAPI:
    """
    Build the application

    Templates are compiled here, so a broken template stops startup.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Snippet sharing web application",
        version=__version__,
        lifespan=lifespan,
        # Server-rendered HTML only; no interactive API docs
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    renderer = TemplateRenderer(settings.TEMPLATES_DIR)
    renderer.load()
    app.state.renderer = renderer
    app.state.session_manager = build_session_manager(settings)

    # Standard middleware, innermost first: the last one added runs first
    app.add_middleware(SecureHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RecoverPanicMiddleware)

    register_exception_handlers(app)

    # Health Check Endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health Check

        Used for service liveness probe.
        """
        return {"status": "healthy"}

    app.include_router(snippets_router)
    app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

    return app


app = create_app()

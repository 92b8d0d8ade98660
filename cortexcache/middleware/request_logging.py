"""
Request Logging Middleware Module

Writes one log line per request: client address, protocol, method, URI,
status and duration.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    # Check X-Forwarded-For header (for reverse proxy setups)
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # Take the first IP (original client)
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host

    return "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request Logging Middleware"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        uri = request.url.path
        if request.url.query:
            uri = f"{uri}?{request.url.query}"

        logger.info(
            "%s - HTTP/%s %s %s %d %.1fms",
            get_client_ip(request),
            request.scope.get("http_version", "1.1"),
            request.method,
            uri,
            response.status_code,
            elapsed_ms,
        )
        return response

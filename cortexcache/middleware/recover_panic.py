"""
Recover Panic Middleware Module

Outermost middleware: turns any exception that escaped the rest of the stack
into a generic 500 response so one failing request never takes the server down.
"""

import logging
import traceback
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RecoverPanicMiddleware(BaseHTTPMiddleware):
    """
    Recover Panic Middleware

    The failed connection is not reused: the response carries `Connection: close`.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Recovered from unhandled exception: %s\nMethod: %s\nPath: %s\nTraceback:\n%s",
                str(exc),
                request.method,
                request.url.path,
                traceback.format_exc(),
            )
            return PlainTextResponse(
                "Internal Server Error",
                status_code=500,
                headers={"Connection": "close"},
            )

"""
Middleware Package

Contains application middleware components.
"""

from cortexcache.middleware.recover_panic import RecoverPanicMiddleware
from cortexcache.middleware.request_logging import RequestLoggingMiddleware
from cortexcache.middleware.secure_headers import SecureHeadersMiddleware
from cortexcache.middleware.session import Session, SessionManager, SessionRoute

__all__ = [
    "RecoverPanicMiddleware",
    "RequestLoggingMiddleware",
    "SecureHeadersMiddleware",
    "Session",
    "SessionManager",
    "SessionRoute",
]

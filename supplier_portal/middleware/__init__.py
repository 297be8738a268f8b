"""
Security middleware modules.
"""
from .rate_limit import create_limiter, rate_limit_exceeded_handler
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "create_limiter",
    "rate_limit_exceeded_handler",
    "SecurityHeadersMiddleware",
]

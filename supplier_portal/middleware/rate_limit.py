"""
Rate limiting with slowapi (in-memory storage, per client).
"""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from ..config import Settings
from ..errors import utc_timestamp

logger = logging.getLogger(__name__)


def create_limiter(settings: Settings) -> Limiter:
    return Limiter(
        key_func=get_remote_address,
        default_limits=[f"{settings.sp_rate_limit_api_per_minute}/minute"],
        enabled=settings.sp_rate_limit_enabled,
        headers_enabled=True,
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    retry_after = getattr(exc, "retry_after", None) or 60
    logger.warning("Rate limit exceeded for %s on %s", get_remote_address(request), request.url.path)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "Too many requests",
            "message": f"Rate limit exceeded: {exc.detail}",
            "retry_after": retry_after,
            "timestamp": utc_timestamp(),
        },
        headers={"Retry-After": str(retry_after)},
    )

"""
Exception taxonomy shared by the resolver, the gates and the routers.

Each exception carries the HTTP status it maps to; the handlers registered in
``main.create_app`` render them as ``{error, message?, code?, timestamp}``.
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import status


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with a trailing Z."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        error: Optional[str] = None,
        extra: Optional[dict] = None,
    ):
        super().__init__(message or error or self.error)
        self.message = message
        self.code = code
        self.extra = extra or {}
        if error is not None:
            self.error = error

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        if self.code:
            body["code"] = self.code
        body.update(self.extra)
        body["timestamp"] = utc_timestamp()
        return body


class AuthError(ApiError):
    """Missing, malformed, expired or revoked bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class Unauthenticated(AuthError):
    """A guard was reached without a verified identity."""
    error = "Authentication required"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid request"


class StoreError(ApiError):
    """
    Backing-store failure. Callers must read it as "authorization
    indeterminate", never as "role denied".
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal server error"

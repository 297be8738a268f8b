"""
Authentication dependencies for FastAPI route protection.
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..context import AppContext, get_context
from ..errors import AuthError, Forbidden, Unauthenticated
from .identity import Identity
from .roles import RoleResolver

logger = logging.getLogger(__name__)

# auto_error=False : on renvoie notre propre 401 au lieu du 403 de FastAPI
security = HTTPBearer(auto_error=False)


def get_resolver(context: AppContext = Depends(get_context)) -> RoleResolver:
    return context.resolver


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    context: AppContext = Depends(get_context),
) -> Identity:
    """
    Verify the bearer token and return the caller's identity.

    The verified identity is also kept on ``request.state.identity`` for the
    guards below.

    Raises:
        AuthError: If the header is missing or the token is rejected
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing or malformed Authorization header", code="auth/missing-token")

    try:
        identity = context.identity_provider.verify(credentials.credentials)
    except AuthError as exc:
        logger.warning("Authentication failed: %s", exc)
        raise

    request.state.identity = identity
    return identity


def _verified_identity(request: Request) -> Identity:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise Unauthenticated("A verified identity is required")
    return identity


def require_admin(
    request: Request,
    _: Identity = Depends(get_current_identity),
    resolver: RoleResolver = Depends(get_resolver),
) -> Identity:
    """
    Ensure the caller holds the admin role.

    Raises:
        Unauthenticated: If no identity was verified for this request
        Forbidden: If the caller is not an admin
    """
    identity = _verified_identity(request)
    is_admin, _record = resolver.resolve_admin(identity)
    if not is_admin:
        raise Forbidden("Admin role required", code="roles/admin-required")
    return identity


def require_supplier(
    request: Request,
    _: Identity = Depends(get_current_identity),
    resolver: RoleResolver = Depends(get_resolver),
) -> Identity:
    """
    Ensure the caller holds the supplier role and attach the matched record to
    ``request.state.supplier``.
    """
    identity = _verified_identity(request)
    is_supplier, record = resolver.resolve_supplier(identity)
    if not is_supplier:
        raise Forbidden("Supplier role required", code="roles/supplier-required")
    request.state.supplier = record
    return identity

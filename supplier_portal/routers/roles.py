"""
Role-check endpoints.
"""
import logging

from fastapi import APIRouter, Depends, Request

from ..auth.dependencies import get_current_identity, get_resolver, require_supplier
from ..auth.identity import Identity
from ..auth.roles import RoleResolver
from ..schemas.role_schemas import (
    CheckAdminResponse,
    CheckRolesResponse,
    CheckSupplierResponse,
    SupplierMeResponse,
    as_admin,
    as_supplier,
)

router = APIRouter(tags=["roles"])
logger = logging.getLogger(__name__)


@router.get("/check-roles", response_model=CheckRolesResponse)
def check_roles(
    identity: Identity = Depends(get_current_identity),
    resolver: RoleResolver = Depends(get_resolver),
):
    """Combined supplier / admin check for the caller."""
    resolution = resolver.resolve_roles(identity)
    logger.info("Roles for %s: %s", identity.unique_id, ",".join(resolution.roles) or "none")
    return {
        "user": identity.public(),
        "roles": {
            "isSupplier": resolution.is_supplier,
            "isAdmin": resolution.is_admin,
            "isAuthenticated": True,
        },
        "supplier": as_supplier(resolution.record),
    }


@router.get("/check-supplier", response_model=CheckSupplierResponse)
def check_supplier(
    identity: Identity = Depends(get_current_identity),
    resolver: RoleResolver = Depends(get_resolver),
):
    is_supplier, record = resolver.resolve_supplier(identity)
    return {
        "isSupplier": is_supplier,
        "supplier": as_supplier(record),
        "user": identity.public(),
    }


@router.get("/check-admin", response_model=CheckAdminResponse)
def check_admin(
    identity: Identity = Depends(get_current_identity),
    resolver: RoleResolver = Depends(get_resolver),
):
    is_admin, record = resolver.resolve_admin(identity)
    return {
        "isAdmin": is_admin,
        "admin": as_admin(record),
        "user": identity.public(),
    }


@router.get("/supplier/me", response_model=SupplierMeResponse)
def supplier_me(request: Request, identity: Identity = Depends(require_supplier)):
    """Registry entry of the calling supplier (set by ``require_supplier``)."""
    return {
        "supplier": as_supplier(request.state.supplier),
        "user": identity.public(),
    }

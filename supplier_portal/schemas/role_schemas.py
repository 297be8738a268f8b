"""
Response schemas for the role-check endpoints.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict


class UserPublic(BaseModel):
    uid: str
    email: Optional[str] = None
    emailVerified: bool = False
    displayName: Optional[str] = None


class SupplierRecord(BaseModel):
    """
    Supplier registry entry. Values come straight from the database and are
    not coerced; unknown fields are kept as-is.
    """
    model_config = ConfigDict(extra="allow")

    record_id: str
    id: Optional[Any] = None
    email: Optional[Any] = None
    name: Optional[Any] = None
    department: Optional[Any] = None
    phone: Optional[Any] = None
    address: Optional[Any] = None


class AdminRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    record_id: str
    email: Optional[Any] = None


class RoleFlags(BaseModel):
    isSupplier: bool
    isAdmin: bool
    isAuthenticated: bool = True


class CheckRolesResponse(BaseModel):
    user: UserPublic
    roles: RoleFlags
    supplier: Optional[SupplierRecord] = None


class CheckSupplierResponse(BaseModel):
    isSupplier: bool
    supplier: Optional[SupplierRecord] = None
    user: UserPublic


class CheckAdminResponse(BaseModel):
    isAdmin: bool
    admin: Optional[AdminRecord] = None
    user: UserPublic


class SupplierMeResponse(BaseModel):
    supplier: SupplierRecord
    user: UserPublic


def as_supplier(record: Optional[Dict[str, Any]]) -> Optional[SupplierRecord]:
    return SupplierRecord(**record) if record else None


def as_admin(record: Optional[Dict[str, Any]]) -> Optional[AdminRecord]:
    return AdminRecord(**record) if record else None

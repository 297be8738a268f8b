"""
Role resolution: maps a verified identity to supplier / admin membership.

Matching is an exact, case-sensitive string comparison with no trimming or
case folding, so ``A@x.com`` does not match a stored ``a@x.com``. When several
supplier records match, the first one in store order wins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .identity import Identity
from ..store.base import RoleStore, iter_records

logger = logging.getLogger(__name__)

ROLE_SUPPLIER = "supplier"
ROLE_ADMIN = "admin"

Record = Dict[str, Any]


def _with_key(record_id: str, record: Record) -> Record:
    return {**record, "record_id": record_id}


def _email_matches(identity: Identity, record: Record) -> bool:
    # Une identité sans email ne matche jamais par email.
    return identity.email is not None and record.get("email") == identity.email


@dataclass(frozen=True)
class RoleResolution:
    is_supplier: bool
    is_admin: bool
    record: Optional[Record] = None
    admin_record: Optional[Record] = None

    @property
    def roles(self) -> Tuple[str, ...]:
        roles = []
        if self.is_supplier:
            roles.append(ROLE_SUPPLIER)
        if self.is_admin:
            roles.append(ROLE_ADMIN)
        return tuple(roles)


class RoleResolver:
    """Reads the supplier and admin registries of a role store."""

    def __init__(
        self,
        store: RoleStore,
        supplier_collection: str = "fournisseur",
        admin_collection: str = "admin",
        admin_indexed_query: bool = True,
    ):
        self.store = store
        self.supplier_collection = supplier_collection
        self.admin_collection = admin_collection
        self.admin_indexed_query = admin_indexed_query

    def resolve_supplier(self, identity: Identity) -> Tuple[bool, Optional[Record]]:
        """
        Scan the whole supplier registry and return the first record whose
        ``email`` equals the identity's email or whose ``id`` equals its uid.
        """
        suppliers = self.store.get_collection(self.supplier_collection)
        if not suppliers:
            logger.info("No supplier registered in %s", self.supplier_collection)
            return False, None

        for record_id, record in iter_records(suppliers):
            if _email_matches(identity, record) or record.get("id") == identity.unique_id:
                logger.info("User %s recognised as supplier %s", identity.unique_id, record_id)
                return True, _with_key(record_id, record)

        logger.info("User %s is not a supplier", identity.unique_id)
        return False, None

    def resolve_admin(self, identity: Identity) -> Tuple[bool, Optional[Record]]:
        """Return the first admin record whose ``email`` equals the identity's email."""
        if identity.email is None:
            return False, None

        if self.admin_indexed_query:
            matches = self.store.find_by_child(self.admin_collection, "email", identity.email)
        else:
            matches = self.store.get_collection(self.admin_collection)

        for record_id, record in iter_records(matches):
            if _email_matches(identity, record):
                logger.info("User %s recognised as admin", identity.unique_id)
                return True, _with_key(record_id, record)

        return False, None

    def resolve_roles(self, identity: Identity) -> RoleResolution:
        # Les deux lookups sont toujours évalués, fournisseur d'abord.
        is_supplier, record = self.resolve_supplier(identity)
        is_admin, admin_record = self.resolve_admin(identity)
        return RoleResolution(
            is_supplier=is_supplier,
            is_admin=is_admin,
            record=record,
            admin_record=admin_record,
        )

"""
Tests unitaires pour supplier_portal.auth.dependencies
"""
import pytest
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from supplier_portal.auth.dependencies import (
    get_current_identity,
    require_admin,
    require_supplier,
)
from supplier_portal.errors import AuthError, Forbidden, Unauthenticated
from conftest import ADMIN_TOKEN, SUPPLIER_TOKEN


def _request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": []})


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentIdentity:
    def test_valid_token(self, context, supplier_identity):
        request = _request()
        identity = get_current_identity(request, _bearer(SUPPLIER_TOKEN), context)

        assert identity == supplier_identity
        assert request.state.identity == supplier_identity

    def test_missing_credentials(self, context):
        with pytest.raises(AuthError) as exc_info:
            get_current_identity(_request(), None, context)
        assert exc_info.value.status_code == 401

    def test_rejected_token(self, context):
        with pytest.raises(AuthError):
            get_current_identity(_request(), _bearer("expired"), context)


class TestGuards:
    def test_require_admin_without_identity(self, resolver):
        """Une garde appelée sans identité vérifiée lève Unauthenticated."""
        with pytest.raises(Unauthenticated) as exc_info:
            require_admin(_request(), None, resolver)
        assert exc_info.value.status_code == 401

    def test_require_supplier_without_identity(self, resolver):
        with pytest.raises(Unauthenticated):
            require_supplier(_request(), None, resolver)

    def test_require_admin_forbidden(self, context, resolver):
        request = _request()
        identity = get_current_identity(request, _bearer(SUPPLIER_TOKEN), context)

        with pytest.raises(Forbidden) as exc_info:
            require_admin(request, identity, resolver)
        assert exc_info.value.status_code == 403

    def test_require_admin_ok(self, context, resolver, admin_identity):
        request = _request()
        identity = get_current_identity(request, _bearer(ADMIN_TOKEN), context)
        assert require_admin(request, identity, resolver) == admin_identity

    def test_require_supplier_attaches_record(self, context, resolver):
        request = _request()
        identity = get_current_identity(request, _bearer(SUPPLIER_TOKEN), context)

        assert require_supplier(request, identity, resolver) == identity
        assert request.state.supplier["record_id"] == "k1"

    def test_require_supplier_forbidden(self, context, resolver):
        request = _request()
        identity = get_current_identity(request, _bearer(ADMIN_TOKEN), context)

        with pytest.raises(Forbidden):
            require_supplier(request, identity, resolver)
        assert getattr(request.state, "supplier", None) is None

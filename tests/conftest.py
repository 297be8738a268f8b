"""
Configuration et fixtures partagées pour les tests pytest.
"""
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from supplier_portal.auth.identity import Identity
from supplier_portal.config import Settings
from supplier_portal.context import build_context
from supplier_portal.errors import AuthError, NotFound
from supplier_portal.main import create_app
from supplier_portal.store.memory import InMemoryRoleStore


SUPPLIER_TOKEN = "token-supplier"
ADMIN_TOKEN = "token-admin"
PLAIN_TOKEN = "token-plain"
BOTH_TOKEN = "token-both"


class FakeIdentityProvider:
    """
    Fournisseur d'identité en mémoire : token -> Identity, uid -> profil.
    """

    def __init__(self):
        self.identities: Dict[str, Identity] = {}
        self.profiles: Dict[str, Dict[str, Any]] = {}
        self.updates: List[tuple] = []

    def add(self, token: str, identity: Identity, **profile: Any) -> None:
        self.identities[token] = identity
        self.profiles[identity.unique_id] = {
            "uid": identity.unique_id,
            "email": identity.email,
            "displayName": identity.display_name,
            "photoURL": None,
            "emailVerified": identity.email_verified,
            "disabled": False,
            "creationTime": "2024-01-01T10:00:00Z",
            "lastSignInTime": None,
            **profile,
        }

    def verify(self, bearer_token: str) -> Identity:
        identity = self.identities.get(bearer_token)
        if identity is None:
            raise AuthError("Invalid token", code="auth/invalid-id-token")
        return identity

    def get_user(self, uid: str) -> Dict[str, Any]:
        if uid not in self.profiles:
            raise NotFound("User not found", code="auth/user-not-found")
        return dict(self.profiles[uid])

    def update_user(self, uid: str, **fields: Any) -> Dict[str, Any]:
        self.updates.append((uid, fields))
        profile = self.get_user(uid)
        profile.update(fields)
        self.profiles[uid] = profile
        return dict(profile)

    def list_users(self) -> List[Dict[str, Any]]:
        return [dict(p) for p in self.profiles.values()]


@pytest.fixture
def supplier_identity():
    return Identity(unique_id="u1", email="s@x.com", email_verified=True, display_name="Sam Supplier")


@pytest.fixture
def admin_identity():
    return Identity(unique_id="u2", email="admin@x.com", email_verified=True)


@pytest.fixture
def plain_identity():
    return Identity(unique_id="u3", email="nobody@x.com")


@pytest.fixture
def both_identity():
    return Identity(unique_id="u4", email="boss@x.com")


@pytest.fixture
def role_data():
    return {
        "fournisseur": {
            "k1": {"email": "s@x.com", "name": "Acme"},
            "k2": {"id": "u-by-id", "email": "other@x.com", "name": "ById Corp"},
            "k3": {"email": "boss@x.com", "name": "Boss Supplies", "department": "IT"},
        },
        "admin": {
            "a1": {"email": "admin@x.com", "name": "Admin"},
            "a2": {"email": "boss@x.com", "name": "Boss"},
        },
    }


@pytest.fixture
def store(role_data):
    return InMemoryRoleStore(role_data)


@pytest.fixture
def settings():
    return Settings(
        sp_env="test",
        sp_store_backend="memory",
        sp_rate_limit_enabled=False,
    )


@pytest.fixture
def identity_provider(supplier_identity, admin_identity, plain_identity, both_identity):
    provider = FakeIdentityProvider()
    provider.add(SUPPLIER_TOKEN, supplier_identity)
    provider.add(ADMIN_TOKEN, admin_identity)
    provider.add(PLAIN_TOKEN, plain_identity)
    provider.add(BOTH_TOKEN, both_identity)
    return provider


@pytest.fixture
def context(settings, identity_provider, store):
    return build_context(settings, identity_provider=identity_provider, store=store)


@pytest.fixture
def resolver(context):
    return context.resolver


@pytest.fixture
def client(context):
    """
    Client FastAPI de test branché sur le store mémoire.
    """
    app = create_app(context=context)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}

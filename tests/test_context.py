"""
Tests pour supplier_portal.context (cycle de vie de l'app Firebase).
"""
from unittest.mock import MagicMock, patch

import pytest

from supplier_portal.config import Settings
from supplier_portal.context import build_context
from supplier_portal.store.memory import InMemoryRoleStore


@pytest.fixture
def memory_settings():
    return Settings(sp_env="test", sp_store_backend="memory", sp_rate_limit_enabled=False)


@pytest.fixture
def firebase_admin_mock():
    with patch("supplier_portal.context.firebase_admin") as fb, patch(
        "supplier_portal.context.credentials.ApplicationDefault"
    ):
        yield fb


class TestFirebaseAppOwnership:
    def test_existing_app_is_left_alone(self, memory_settings, firebase_admin_mock):
        """Une app créée ailleurs dans le process n'est pas supprimée."""
        existing = MagicMock()
        firebase_admin_mock.get_app.return_value = existing

        context = build_context(memory_settings)

        assert context.firebase_app is existing
        assert context.owns_firebase_app is False
        firebase_admin_mock.initialize_app.assert_not_called()

        context.close()

        firebase_admin_mock.delete_app.assert_not_called()
        assert context.firebase_app is None

    def test_created_app_is_deleted_on_close(self, memory_settings, firebase_admin_mock):
        created = MagicMock()
        firebase_admin_mock.get_app.side_effect = ValueError("no default app")
        firebase_admin_mock.initialize_app.return_value = created

        context = build_context(memory_settings)

        assert context.firebase_app is created
        assert context.owns_firebase_app is True

        context.close()
        context.close()

        firebase_admin_mock.delete_app.assert_called_once_with(created)
        assert context.owns_firebase_app is False

    def test_injected_collaborators_skip_firebase(self, memory_settings, firebase_admin_mock):
        context = build_context(memory_settings, identity_provider=MagicMock(), store=InMemoryRoleStore())

        assert context.firebase_app is None
        firebase_admin_mock.get_app.assert_not_called()

        context.close()
        firebase_admin_mock.delete_app.assert_not_called()

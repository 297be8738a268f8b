"""
Tests pour supplier_portal.config
"""
import pytest

from supplier_portal.config import Settings


SERVICE_ACCOUNT = '{"type": "service_account", "project_id": "demo"}'


class TestSettings:
    def test_defaults(self):
        settings = Settings(sp_store_backend="memory")

        assert settings.sp_supplier_collection == "fournisseur"
        assert settings.sp_admin_collection == "admin"
        assert settings.sp_admin_indexed_query is True
        assert settings.service_account_info() is None

    def test_production_requires_firebase_credentials(self):
        with pytest.raises(ValueError):
            Settings(sp_env="production", sp_store_backend="firebase")

    def test_production_rejects_memory_store(self):
        with pytest.raises(ValueError):
            Settings(
                sp_env="production",
                sp_store_backend="memory",
                sp_firebase_service_account=SERVICE_ACCOUNT,
                sp_firebase_database_url="https://demo.firebaseio.com",
            )

    def test_production_ok(self):
        settings = Settings(
            sp_env="production",
            sp_firebase_service_account=SERVICE_ACCOUNT,
            sp_firebase_database_url="https://demo.firebaseio.com",
        )
        assert settings.is_production is True
        assert settings.service_account_info()["project_id"] == "demo"

    def test_service_account_must_be_json_object(self):
        with pytest.raises(ValueError):
            Settings(sp_firebase_service_account="not json")
        with pytest.raises(ValueError):
            Settings(sp_firebase_service_account='["a", "b"]')

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            Settings(sp_store_backend="mongo")

    def test_allowed_origins_csv(self):
        settings = Settings(sp_allowed_origins=" https://a.example.com , https://b.example.com ,")
        assert settings.allowed_origins_list() == ["https://a.example.com", "https://b.example.com"]

    def test_allowed_origins_default(self):
        settings = Settings(sp_allowed_origins="  ")
        assert settings.allowed_origins_list() == ["http://127.0.0.1:5173", "http://localhost:5173"]

    def test_unknown_env_is_rejected(self):
        with pytest.raises(ValueError):
            Settings(sp_env="prod-ish", sp_store_backend="memory")

    def test_env_is_normalised(self):
        settings = Settings(sp_env=" TEST ", sp_store_backend="memory")
        assert settings.sp_env == "test"
        assert settings.is_production is False

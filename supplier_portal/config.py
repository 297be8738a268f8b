import json
from typing import List, Any, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator


KNOWN_ENVS = frozenset({"development", "test", "staging", "production"})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sp_env: str = "development"
    sp_port: int = 3000
    sp_log_level: str = "INFO"

    sp_allowed_origins: Optional[str] = None

    # Role store backend: "firebase" or "memory"
    sp_store_backend: str = "firebase"

    # Firebase Configuration
    sp_firebase_service_account: Optional[str] = None
    sp_firebase_database_url: Optional[str] = None

    # Collections in the realtime database
    sp_supplier_collection: str = "fournisseur"
    sp_admin_collection: str = "admin"
    sp_admin_indexed_query: bool = True

    # Rate Limiting Configuration
    sp_rate_limit_enabled: bool = True
    sp_rate_limit_api_per_minute: int = 100

    @model_validator(mode="after")
    def validate_production_backend(self) -> "Settings":
        if self.sp_env in {"production", "staging"}:
            if self.sp_store_backend != "firebase":
                raise ValueError(
                    "The in-memory role store cannot be used in staging/production. "
                    "Set sp_store_backend=firebase."
                )
        return self

    @model_validator(mode="after")
    def validate_firebase_settings(self) -> "Settings":
        if self.sp_store_backend == "firebase" and self.sp_env in {"production", "staging"}:
            if not self.sp_firebase_service_account:
                raise ValueError("sp_firebase_service_account must be set in staging/production.")
            if not self.sp_firebase_database_url:
                raise ValueError("sp_firebase_database_url must be set in staging/production.")
        return self

    @field_validator("sp_env")
    @classmethod
    def ensure_known_env(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in KNOWN_ENVS:
            raise ValueError(f"sp_env must be one of: {', '.join(sorted(KNOWN_ENVS))}")
        return v

    @field_validator("sp_store_backend")
    @classmethod
    def ensure_known_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"firebase", "memory"}:
            raise ValueError("sp_store_backend must be 'firebase' or 'memory'")
        return v

    @field_validator("sp_firebase_service_account")
    @classmethod
    def ensure_service_account_json(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v.strip() == "":
            return None
        try:
            parsed = json.loads(v)
        except json.JSONDecodeError as exc:
            raise ValueError(f"sp_firebase_service_account is not valid JSON: {exc}") from exc
        if not isinstance(parsed, dict):
            raise ValueError("sp_firebase_service_account must be a JSON object")
        return v

    @field_validator("sp_allowed_origins", mode="before")
    @classmethod
    def normalize_allowed_origins_raw(cls, v: Any) -> Optional[str]:
        """
        Le champ reste une simple string CSV, jamais du JSON.
        """
        if v is None:
            return None
        if isinstance(v, list):
            # quelqu'un a mis ["a","b"] dans l'env -> "a,b"
            joined = ",".join([str(x).strip() for x in v if str(x).strip()])
            return joined if joined else None
        if isinstance(v, str):
            s = v.strip()
            return s if s != "" else None
        return str(v)

    @field_validator("sp_rate_limit_api_per_minute")
    @classmethod
    def ensure_positive_limit(cls, v: int) -> int:
        return max(1, v)

    def allowed_origins_list(self) -> List[str]:
        default_list = [
            "http://127.0.0.1:5173",
            "http://localhost:5173",
        ]

        raw = self.sp_allowed_origins
        if raw is None or raw.strip() == "":
            return default_list

        parts = [p.strip() for p in raw.split(",") if p.strip()]
        return parts if parts else default_list

    @property
    def is_production(self) -> bool:
        return self.sp_env == "production"

    def service_account_info(self) -> Optional[dict]:
        """Parsed service-account key, or None when not configured."""
        if not self.sp_firebase_service_account:
            return None
        return json.loads(self.sp_firebase_service_account)


def get_settings() -> Settings:
    return Settings()

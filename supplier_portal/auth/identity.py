"""
Identity provider adapter.

Token verification and account management are delegated to Firebase
Authentication; this module only translates between the Admin SDK and the
application's ``Identity`` / profile shapes.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from firebase_admin import App, auth, exceptions

from ..errors import AuthError, NotFound, StoreError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Verified caller, valid for one request."""
    unique_id: str
    email: Optional[str]
    email_verified: bool = False
    display_name: Optional[str] = None

    def public(self) -> Dict[str, Any]:
        return {
            "uid": self.unique_id,
            "email": self.email,
            "emailVerified": self.email_verified,
            "displayName": self.display_name,
        }


class IdentityProvider(Protocol):
    def verify(self, bearer_token: str) -> Identity: ...

    def get_user(self, uid: str) -> Dict[str, Any]: ...

    def update_user(self, uid: str, **fields: Any) -> Dict[str, Any]: ...

    def list_users(self) -> List[Dict[str, Any]]: ...


def _ms_to_iso(value: Optional[int]) -> Optional[str]:
    if not value:
        return None
    stamp = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return stamp.isoformat().replace("+00:00", "Z")


def user_record_to_profile(record: auth.UserRecord) -> Dict[str, Any]:
    metadata = record.user_metadata
    return {
        "uid": record.uid,
        "email": record.email,
        "displayName": record.display_name,
        "photoURL": record.photo_url,
        "emailVerified": bool(record.email_verified),
        "disabled": bool(record.disabled),
        "creationTime": _ms_to_iso(metadata.creation_timestamp) if metadata else None,
        "lastSignInTime": _ms_to_iso(metadata.last_sign_in_timestamp) if metadata else None,
    }


# Les mises à jour de profil passent par ces noms de champs côté SDK.
PROFILE_FIELD_TO_SDK = {
    "displayName": "display_name",
    "photoURL": "photo_url",
}


class FirebaseIdentityProvider:
    def __init__(self, app: App, check_revoked: bool = True):
        self._app = app
        self._check_revoked = check_revoked

    def verify(self, bearer_token: str) -> Identity:
        try:
            claims = auth.verify_id_token(
                bearer_token, app=self._app, check_revoked=self._check_revoked
            )
        except auth.ExpiredIdTokenError as exc:
            raise AuthError("Token expired", code="auth/id-token-expired") from exc
        except auth.RevokedIdTokenError as exc:
            raise AuthError("Token revoked", code="auth/id-token-revoked") from exc
        except auth.UserDisabledError as exc:
            raise AuthError("User account is disabled", code="auth/user-disabled") from exc
        except auth.InvalidIdTokenError as exc:
            raise AuthError("Invalid token", code="auth/invalid-id-token") from exc
        except ValueError as exc:
            raise AuthError("Malformed token", code="auth/argument-error") from exc
        except exceptions.FirebaseError as exc:
            logger.warning("Token verification failed: %s", exc)
            raise AuthError("Token verification failed", code=exc.code) from exc

        return Identity(
            unique_id=claims["uid"],
            email=claims.get("email"),
            email_verified=bool(claims.get("email_verified", False)),
            display_name=claims.get("name"),
        )

    def get_user(self, uid: str) -> Dict[str, Any]:
        try:
            record = auth.get_user(uid, app=self._app)
        except auth.UserNotFoundError as exc:
            raise NotFound("User not found", code="auth/user-not-found") from exc
        except exceptions.FirebaseError as exc:
            raise StoreError("Identity provider error", code=exc.code) from exc
        return user_record_to_profile(record)

    def update_user(self, uid: str, **fields: Any) -> Dict[str, Any]:
        kwargs = {PROFILE_FIELD_TO_SDK[name]: value for name, value in fields.items()}
        try:
            record = auth.update_user(uid, app=self._app, **kwargs)
        except auth.UserNotFoundError as exc:
            raise NotFound("User not found", code="auth/user-not-found") from exc
        except ValueError as exc:
            # validation côté SDK (URL de photo invalide, nom vide...)
            raise ValidationError(str(exc), code="auth/invalid-argument") from exc
        except exceptions.FirebaseError as exc:
            raise StoreError("Identity provider error", code=exc.code) from exc
        return user_record_to_profile(record)

    def list_users(self) -> List[Dict[str, Any]]:
        try:
            page = auth.list_users(app=self._app)
            return [user_record_to_profile(user) for user in page.iterate_all()]
        except exceptions.FirebaseError as exc:
            raise StoreError("Identity provider error", code=exc.code) from exc

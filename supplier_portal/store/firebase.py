"""
Firebase Realtime Database role store.
"""
import logging
from typing import Any

from firebase_admin import App, db, exceptions

from ..errors import StoreError

logger = logging.getLogger(__name__)


class FirebaseRoleStore:
    """Reads the role registries through the Admin SDK ``db`` module."""

    def __init__(self, app: App):
        self._app = app

    def _ref(self, path: str) -> db.Reference:
        return db.reference(path, app=self._app)

    def get_collection(self, name: str) -> Any:
        try:
            return self._ref(name).get()
        except exceptions.FirebaseError as exc:
            logger.error("Failed to read collection %s: %s", name, exc)
            raise StoreError("Role store read failed", code=exc.code) from exc

    def find_by_child(self, name: str, field: str, value: Any) -> Any:
        # Requiert ".indexOn" sur le champ dans les règles de la base.
        try:
            return self._ref(name).order_by_child(field).equal_to(value).get()
        except exceptions.FirebaseError as exc:
            logger.error("Failed to query %s by %s: %s", name, field, exc)
            raise StoreError("Role store query failed", code=exc.code) from exc

    def ping(self) -> None:
        try:
            self._ref("/").get(shallow=True)
        except exceptions.FirebaseError as exc:
            raise StoreError("Role store unreachable", code=exc.code) from exc

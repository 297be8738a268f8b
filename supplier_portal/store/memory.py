import copy
import logging
from typing import Any, Dict, Optional

from ..errors import StoreError
from .base import iter_records

logger = logging.getLogger(__name__)


class InMemoryRoleStore:
    """
    Dict-backed role store for local development and tests.

    Collections keep insertion order, which stands in for the realtime
    database's key order.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(data) if data else {}
        self.available = True

    def _ensure_available(self) -> None:
        if not self.available:
            raise StoreError("Role store unavailable", code="store/unavailable")

    def put(self, name: str, key: str, record: Dict[str, Any]) -> None:
        collection = self._data.setdefault(name, {})
        collection[key] = dict(record)

    def get_collection(self, name: str) -> Any:
        self._ensure_available()
        return copy.deepcopy(self._data.get(name))

    def find_by_child(self, name: str, field: str, value: Any) -> Dict[str, Any]:
        self._ensure_available()
        return {
            key: dict(record)
            for key, record in iter_records(self._data.get(name))
            if record.get(field) == value
        }

    def ping(self) -> None:
        self._ensure_available()
        logger.debug("In-memory role store holds %d collections", len(self._data))

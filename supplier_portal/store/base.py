"""
Role store contract.

A role store exposes the supplier and admin registries of the realtime
database as raw JSON values. Implementations raise ``StoreError`` for any
backend failure.
"""
from typing import Any, Dict, Iterator, Protocol, Tuple


class RoleStore(Protocol):
    def get_collection(self, name: str) -> Any:
        """Return the whole collection value (dict, list or None)."""
        ...

    def find_by_child(self, name: str, field: str, value: Any) -> Any:
        """Return the children of ``name`` whose ``field`` equals ``value``."""
        ...

    def ping(self) -> None:
        """Raise StoreError if the store cannot be reached."""
        ...


def iter_records(value: Any) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """
    Yield ``(record_id, record)`` pairs in store order.

    Une collection aux clés entières denses revient sous forme de liste JSON :
    l'index sert alors de clé, les trous (None) et les valeurs non-objet sont
    ignorés.
    """
    if not value:
        return
    if isinstance(value, dict):
        items = value.items()
    elif isinstance(value, list):
        items = ((str(i), v) for i, v in enumerate(value))
    else:
        return
    for key, record in items:
        if isinstance(record, dict):
            yield str(key), record

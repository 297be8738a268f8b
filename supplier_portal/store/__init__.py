"""
Role store backends.
"""

from .base import RoleStore, iter_records
from .memory import InMemoryRoleStore

__all__ = [
    "RoleStore",
    "iter_records",
    "InMemoryRoleStore",
]

"""Storage infrastructure.

Key/value stores returning Result types, and the persisted boolean flag
built on top of them.
"""

from asana_improvements.infrastructure.storage.json_store import JsonFileStore, MemoryStore
from asana_improvements.infrastructure.storage.persisted_flag import PersistedFlag

__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "PersistedFlag",
]

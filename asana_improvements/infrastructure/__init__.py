"""Infrastructure layer for Asana Improvements.

Concrete implementations of the domain protocols.

Exports:
    Storage:
        - JsonFileStore: JSON file key/value store
        - MemoryStore: In-memory key/value store
        - PersistedFlag: Durable boolean preference

    Page:
        - LxmlDocument: lxml-backed page document
        - LxmlElement: Element wrapper used by LxmlDocument
"""

from asana_improvements.infrastructure.page import LxmlDocument, LxmlElement
from asana_improvements.infrastructure.storage import (
    JsonFileStore,
    MemoryStore,
    PersistedFlag,
)

__all__ = [
    # Storage
    "JsonFileStore",
    "MemoryStore",
    "PersistedFlag",
    # Page
    "LxmlDocument",
    "LxmlElement",
]

"""
Storage abstractions.

Integration points:
- DocumentStorage → MongoDB (users, books collections)
"""

from bookshare.storage.base import (
    DocumentStorage,
    StorageProvider,
    Collections,
)
from bookshare.storage.local import InMemoryDocumentStorage, create_local_storage

__all__ = [
    "DocumentStorage",
    "StorageProvider",
    "Collections",
    "InMemoryDocumentStorage",
    "create_local_storage",
]

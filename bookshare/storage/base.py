"""
Storage abstraction layer.

All persistence goes through these interfaces. Users and books are plain
documents in named collections, queried by field equality. This allows
swapping implementations (in-memory → MongoDB, etc.) without changing
application code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from bookshare.core.models import DeleteResult, InsertResult, UpdateResult


# =============================================================================
# Storage Interfaces
# =============================================================================


class DocumentStorage(ABC):
    """
    Storage for structured documents (users, books).

    Documents are dicts keyed by ``id``. Filters match on field equality;
    an empty or missing filter matches every document.
    """

    async def connect(self) -> None:
        """Open connections. Called once at app startup."""

    async def close(self) -> None:
        """Release connections. Called once at app shutdown."""

    @abstractmethod
    async def find_one(
        self, collection: str, filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Get the first document matching filters."""
        pass

    @abstractmethod
    async def find(
        self, collection: str, filters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Get all documents matching filters, in insertion order."""
        pass

    @abstractmethod
    async def insert_one(self, collection: str, document: dict[str, Any]) -> InsertResult:
        """Insert a document, assigning an id if it has none."""
        pass

    @abstractmethod
    async def update_one(
        self,
        collection: str,
        filters: dict[str, Any],
        fields: dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        """
        Set fields on the first matching document.

        With upsert, a missing document is created from the equality
        filters plus the supplied fields.
        """
        pass

    @abstractmethod
    async def delete_one(self, collection: str, filters: dict[str, Any]) -> DeleteResult:
        """Delete at most one matching document."""
        pass


# =============================================================================
# Storage Provider (dependency injection container)
# =============================================================================


class StorageProvider(BaseModel):
    """
    Container for storage backends.

    Initialize once at app startup; handlers receive it via Depends.
    """

    model_config = {"arbitrary_types_allowed": True}

    documents: DocumentStorage

    async def connect(self) -> None:
        await self.documents.connect()

    async def close(self) -> None:
        await self.documents.close()


# =============================================================================
# Collection Names
# =============================================================================


class Collections:
    """Standard collection names."""

    USERS = "users"
    BOOKS = "books"

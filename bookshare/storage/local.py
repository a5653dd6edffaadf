"""
Local storage implementation for development and tests.

An in-memory document store that works without any external services.
Every command is logged at DEBUG so store traffic can be traced.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from bookshare.core.models import DeleteResult, InsertResult, UpdateResult
from bookshare.core.utils import generate_id
from bookshare.storage.base import DocumentStorage, StorageProvider

logger = logging.getLogger(__name__)


def _matches(doc: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(doc.get(key) == value for key, value in filters.items())


# =============================================================================
# In-Memory Document Storage
# =============================================================================


class InMemoryDocumentStorage(DocumentStorage):
    """In-memory document storage. Dict order doubles as insertion order."""

    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
        self.connected = False

    async def connect(self) -> None:
        self.connected = True
        logger.debug("in-memory store connected")

    async def close(self) -> None:
        self.connected = False
        logger.debug("in-memory store closed")

    def _collection(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._data.setdefault(collection, {})

    def _first(self, collection: str, filters: dict[str, Any] | None) -> dict[str, Any] | None:
        docs = self._collection(collection)
        # Point lookup by id without scanning
        if filters and set(filters) == {"id"}:
            return docs.get(filters["id"])
        for doc in docs.values():
            if _matches(doc, filters):
                return doc
        return None

    async def find_one(
        self, collection: str, filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        logger.debug("findOne %s %s", collection, filters)
        doc = self._first(collection, filters)
        return copy.deepcopy(doc) if doc is not None else None

    async def find(
        self, collection: str, filters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        logger.debug("find %s %s", collection, filters)
        return [
            copy.deepcopy(doc)
            for doc in self._collection(collection).values()
            if _matches(doc, filters)
        ]

    async def insert_one(self, collection: str, document: dict[str, Any]) -> InsertResult:
        doc = copy.deepcopy(document)
        doc_id = doc.get("id") or generate_id()
        docs = self._collection(collection)
        if doc_id in docs:
            raise ValueError(f"Duplicate id in {collection}: {doc_id}")
        doc["id"] = doc_id
        docs[doc_id] = doc
        logger.debug("insertOne %s %s", collection, doc_id)
        return InsertResult(inserted_id=doc_id)

    async def update_one(
        self,
        collection: str,
        filters: dict[str, Any],
        fields: dict[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        logger.debug("updateOne %s %s upsert=%s", collection, filters, upsert)
        # ids are immutable
        fields = {key: value for key, value in fields.items() if key != "id"}
        doc = self._first(collection, filters)

        if doc is None:
            if not upsert:
                return UpdateResult()
            created = await self.insert_one(collection, {**filters, **fields})
            return UpdateResult(upserted_count=1, upserted_id=created.inserted_id)

        changed = any(doc.get(key) != value for key, value in fields.items())
        doc.update(copy.deepcopy(fields))
        return UpdateResult(matched_count=1, modified_count=1 if changed else 0)

    async def delete_one(self, collection: str, filters: dict[str, Any]) -> DeleteResult:
        logger.debug("deleteOne %s %s", collection, filters)
        doc = self._first(collection, filters)
        if doc is None:
            return DeleteResult(deleted_count=0)
        del self._collection(collection)[doc["id"]]
        return DeleteResult(deleted_count=1)


# =============================================================================
# Factory
# =============================================================================


def create_local_storage() -> StorageProvider:
    """Create a StorageProvider with local implementations."""
    return StorageProvider(documents=InMemoryDocumentStorage())

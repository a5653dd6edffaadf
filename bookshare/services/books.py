"""
Book lifecycle operations.

Authorization happens before these are called (see auth.policies); the
functions here only talk to the store and shape results.
"""

from __future__ import annotations

import logging
from datetime import datetime

from bookshare.core.errors import BadRequest, NotFound
from bookshare.core.models import (
    Book,
    BookDetails,
    BookUpdate,
    DeleteResult,
    InsertResult,
    UpdateResult,
)
from bookshare.core.recency import Recency, filter_by_recency
from bookshare.storage.base import Collections, StorageProvider

logger = logging.getLogger(__name__)


async def create_book(
    storage: StorageProvider, details: BookDetails, now: datetime,
) -> InsertResult:
    """Insert a new book. The upload date is stamped when not supplied."""
    doc = details.to_document()
    if doc.get("upload_date") is None:
        doc["upload_date"] = now
    result = await storage.documents.insert_one(Collections.BOOKS, doc)
    logger.info("Created book %s", result.inserted_id)
    return result


async def list_books(
    storage: StorageProvider,
    now: datetime,
    email: str | None = None,
    old: bool = False,
    new: bool = False,
    window: int | None = None,
) -> list[Book]:
    """
    List books, optionally only one owner's, optionally only old or new.

    ``old`` wins when both flags are set.
    """
    docs = await storage.documents.find(
        Collections.BOOKS, {"email": email} if email else None,
    )
    books = [Book.model_validate(doc) for doc in docs]

    recency = None
    if old:
        recency = Recency.OLD
    elif new:
        recency = Recency.NEW
    return filter_by_recency(books, recency, now, window)


async def get_book(
    storage: StorageProvider,
    email: str | None = None,
    book_id: str | None = None,
) -> Book:
    """Look up one book by owner email or by id; exactly one must be given."""
    if bool(email) == bool(book_id):
        raise BadRequest("Provide exactly one of 'email' or 'id'")

    filters = {"email": email} if email else {"id": book_id}
    doc = await storage.documents.find_one(Collections.BOOKS, filters)
    if not doc:
        raise NotFound("Book not found")
    return Book.model_validate(doc)


async def update_book(
    storage: StorageProvider, book_id: str, changes: BookUpdate,
) -> UpdateResult:
    """
    Set the supplied fields on a book, creating it if the id is unknown.

    The created record carries only the id and the supplied fields.
    """
    result = await storage.documents.update_one(
        Collections.BOOKS, {"id": book_id}, changes.to_document(), upsert=True,
    )
    if result.upserted_id:
        logger.info("Upserted book %s", result.upserted_id)
    else:
        logger.info("Updated book %s", book_id)
    return result


async def delete_book(storage: StorageProvider, book_id: str) -> DeleteResult:
    """Delete at most one book. Unknown ids delete nothing."""
    result = await storage.documents.delete_one(Collections.BOOKS, {"id": book_id})
    logger.info("Deleted %d book(s) with id %s", result.deleted_count, book_id)
    return result

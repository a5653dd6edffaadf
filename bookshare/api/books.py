"""
Book routes.

Every route requires a session token; creating and updating books also
requires the CREATOR role.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from bookshare.auth.capabilities import Capability
from bookshare.auth.context import AuthContext
from bookshare.auth.policies import (
    get_storage,
    require_auth,
    require_creator,
    require_if_strict,
)
from bookshare.core.models import (
    Book,
    CreateBookRequest,
    DeleteResult,
    InsertResult,
    UpdateBookRequest,
    UpdateResult,
)
from bookshare.core.utils import utc_now
from bookshare.services import books
from bookshare.storage.base import StorageProvider

router = APIRouter(tags=["books"])


def get_now() -> datetime:
    """Request clock, overridable in tests."""
    return utc_now()


@router.post("/books/", response_model=InsertResult)
async def create_book(
    request: CreateBookRequest,
    ctx: AuthContext = Depends(require_creator()),
    storage: StorageProvider = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    return await books.create_book(storage, request.book_details, now)


@router.get("/books", response_model=list[Book])
async def list_books(
    email: str | None = None,
    old: bool = False,
    new: bool = False,
    ctx: AuthContext = Depends(require_auth()),
    storage: StorageProvider = Depends(get_storage),
    now: datetime = Depends(get_now),
):
    """List books, optionally one owner's, optionally only old or new ones."""
    return await books.list_books(
        storage,
        now,
        email=email,
        old=old,
        new=new,
    )


@router.get("/book/", response_model=Book)
async def get_book(
    email: str | None = None,
    book_id: str | None = Query(None, alias="id"),
    ctx: AuthContext = Depends(require_auth()),
    storage: StorageProvider = Depends(get_storage),
):
    """Get one book by owner email or by id."""
    return await books.get_book(storage, email=email, book_id=book_id)


@router.put("/book/{book_id}", response_model=UpdateResult)
async def update_book(
    book_id: str,
    request: UpdateBookRequest,
    ctx: AuthContext = Depends(require_creator("You are not allowed to edit books")),
    storage: StorageProvider = Depends(get_storage),
):
    """Update-or-create: an unknown id creates a book with the given fields."""
    return await books.update_book(storage, book_id, request.book_details)


@router.delete("/books/delete", response_model=DeleteResult)
async def delete_book(
    book_id: str = Query(..., alias="id"),
    ctx: AuthContext = Depends(
        require_if_strict(Capability.BOOK_DELETE, "You are not allowed to delete books")
    ),
    storage: StorageProvider = Depends(get_storage),
):
    return await books.delete_book(storage, book_id)

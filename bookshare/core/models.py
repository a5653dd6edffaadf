"""
Core data models for the bookshare service.

Users and books are stored as plain documents; these models validate what
goes in and shape what comes out. Field names are snake_case in Python and
camelCase on the wire (``uploadDate``, ``insertedId``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bookshare.auth.capabilities import Role


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        """Dump to a storage document, skipping unset fields."""
        return self.model_dump(exclude_unset=True, mode="python")


# =============================================================================
# Users
# =============================================================================


class UserRecord(CamelModel):
    """User as stored in the credential store."""

    email: str
    username: str | None = None
    password_hash: str | None = None
    roles: list[Role] = Field(default_factory=lambda: [Role.VIEW_ALL])

    def public(self) -> UserPublic:
        return UserPublic(email=self.email, username=self.username, roles=self.roles)


class UserPublic(CamelModel):
    """User data returned to clients (no password hash)."""

    email: str
    username: str | None = None
    roles: list[Role]


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str


class AddUserRequest(CamelModel):
    """Raw user object accepted by /addUser."""

    email: str = Field(min_length=1)
    username: str | None = None
    password: str | None = None
    roles: list[Role] = Field(default_factory=lambda: [Role.VIEW_ALL], min_length=1)


class RoleUpdateRequest(CamelModel):
    email: str = Field(min_length=1)
    roles: list[Role] = Field(min_length=1)


class AuthResponse(CamelModel):
    status: str = "success"
    token: str
    user: UserPublic
    message: str


class UserCheckResponse(CamelModel):
    result: UserPublic
    token: str


# =============================================================================
# Books
# =============================================================================


class Book(CamelModel):
    """
    A book record.

    Only ``id`` is guaranteed: a book created through an upsert carries
    just the fields that were supplied.
    """

    id: str
    title: str | None = None
    description: str | None = None
    email: str | None = None
    name: str | None = None
    url: str | None = None
    upload_date: datetime | None = None


class BookDetails(CamelModel):
    """Fields accepted when creating a book."""

    title: str
    description: str | None = None
    email: str | None = None
    name: str | None = None
    url: str | None = None
    upload_date: datetime | None = None


class BookUpdate(CamelModel):
    """Partial field set for an update; id and uploadDate are immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid",
    )

    title: str | None = None
    description: str | None = None
    email: str | None = None
    name: str | None = None
    url: str | None = None


class CreateBookRequest(CamelModel):
    book_details: BookDetails


class UpdateBookRequest(CamelModel):
    book_details: BookUpdate


# =============================================================================
# Store acknowledgments
# =============================================================================


class InsertResult(CamelModel):
    acknowledged: bool = True
    inserted_id: str


class UpdateResult(CamelModel):
    acknowledged: bool = True
    matched_count: int = 0
    modified_count: int = 0
    upserted_count: int = 0
    upserted_id: str | None = None


class DeleteResult(CamelModel):
    acknowledged: bool = True
    deleted_count: int = 0

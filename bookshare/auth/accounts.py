"""
Credential flows: registration, login, user check and role updates.

All functions take the StorageProvider explicitly; routes inject it.
"""

from __future__ import annotations

import logging

from bookshare.auth.capabilities import Role
from bookshare.auth.jwt import create_access_token, hash_password, verify_password
from bookshare.core.errors import Conflict, Internal, Unauthorized
from bookshare.core.models import (
    AddUserRequest,
    AuthResponse,
    InsertResult,
    LoginRequest,
    RegisterRequest,
    UpdateResult,
    UserCheckResponse,
    UserRecord,
)
from bookshare.storage.base import Collections, StorageProvider

logger = logging.getLogger(__name__)


async def get_user(storage: StorageProvider, email: str) -> UserRecord | None:
    """Point lookup by email."""
    doc = await storage.documents.find_one(Collections.USERS, {"email": email})
    return UserRecord.model_validate(doc) if doc else None


async def _insert_user(storage: StorageProvider, user: UserRecord) -> InsertResult:
    if await get_user(storage, user.email):
        raise Conflict("User Already Registered")
    try:
        return await storage.documents.insert_one(
            Collections.USERS, user.model_dump(mode="json"),
        )
    except Exception as e:
        logger.exception("Failed to insert user %s", user.email)
        raise Internal("something is wrong") from e


async def register(storage: StorageProvider, data: RegisterRequest) -> AuthResponse:
    """
    Create a user with the default VIEW_ALL role and issue a token.

    Registration is create-once: a second call with the same email fails
    with Conflict and writes nothing.
    """
    user = UserRecord(
        email=data.email,
        username=data.username,
        password_hash=await hash_password(data.password),
        roles=[Role.VIEW_ALL],
    )
    result = await _insert_user(storage, user)
    if not result.inserted_id:
        raise Internal("something is wrong")

    logger.info("Registered user %s", user.email)
    return AuthResponse(
        token=create_access_token(user.email),
        user=user.public(),
        message="Successfully registered",
    )


async def login(storage: StorageProvider, data: LoginRequest) -> AuthResponse:
    """Verify an email/password pair and issue a token."""
    user = await get_user(storage, data.email)
    if not user:
        logger.warning("Login for unknown email %s", data.email)
        raise Unauthorized("No user found")

    if not await verify_password(data.password, user.password_hash):
        logger.warning("Login with wrong password for %s", data.email)
        raise Unauthorized("password doesn't match")

    logger.info("User %s logged in", user.email)
    return AuthResponse(
        token=create_access_token(user.email),
        user=user.public(),
        message="Successfully logged in",
    )


async def add_user(storage: StorageProvider, data: AddUserRequest) -> InsertResult:
    """Insert a user object as given, hashing its password if present."""
    user = UserRecord(
        email=data.email,
        username=data.username,
        password_hash=await hash_password(data.password) if data.password else None,
        roles=data.roles,
    )
    result = await _insert_user(storage, user)
    logger.info("Added user %s", user.email)
    return result


async def check_user(storage: StorageProvider, email: str) -> UserCheckResponse | None:
    """Look up a user and issue a token for them. None when unknown."""
    user = await get_user(storage, email)
    if not user:
        return None
    return UserCheckResponse(result=user.public(), token=create_access_token(user.email))


async def update_roles(
    storage: StorageProvider, email: str, roles: list[Role],
) -> UpdateResult:
    """Set the roles of the user with this email, creating the record if absent."""
    result = await storage.documents.update_one(
        Collections.USERS,
        {"email": email},
        {"roles": [Role(r).value for r in roles]},
        upsert=True,
    )
    logger.info("Set roles of %s to %s", email, [Role(r).value for r in roles])
    return result

"""
Policies - route authorization as FastAPI dependencies.

Usage:
    ctx: AuthContext = Depends(require_auth())      # valid session token
    ctx: AuthContext = Depends(require_creator())   # token + CREATOR role

Design:
- The session token is read from ``Authorization: Bearer <token>``
- No token → 401, token that fails verification → 403
- The CREATOR gate loads the user record and checks its roles (401 if
  missing); it never writes
"""

from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookshare.auth.accounts import get_user
from bookshare.auth.capabilities import Capability, Role
from bookshare.auth.context import AuthContext
from bookshare.auth.jwt import TokenError, decode_token
from bookshare.config import get_settings
from bookshare.core.errors import Forbidden, NotAllowed, Unauthorized
from bookshare.integrations.sentry import set_user
from bookshare.storage.base import StorageProvider

logger = logging.getLogger(__name__)


# Doesn't fail on its own if no token; we raise our own 401
optional_bearer = HTTPBearer(auto_error=False)


def get_storage(request: Request) -> StorageProvider:
    """The process-wide storage provider created in the app lifespan."""
    return request.app.state.storage


# =============================================================================
# Session verification
# =============================================================================


async def get_auth_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
) -> AuthContext:
    """Verify the session token and return the caller's identity."""
    if not credentials or not credentials.credentials:
        raise Unauthorized("Unauthorized access")

    try:
        payload = decode_token(credentials.credentials)
    except TokenError as e:
        logger.warning("Rejected session token: %s", e)
        raise Forbidden("Forbidden access") from e

    set_user(payload.sub)
    return AuthContext(email=payload.sub, claims=payload.model_dump())


async def resolve_roles(storage: StorageProvider, ctx: AuthContext) -> AuthContext:
    """Load the caller's roles from the credential store."""
    user = await get_user(storage, ctx.email)
    return ctx.with_roles(user.roles if user else [])


# =============================================================================
# Main Interface
# =============================================================================


def require_auth() -> Callable:
    """Just require a valid session token, no specific role."""
    return get_auth_context


def require_creator(message: str = "You are not allowed to create books") -> Callable:
    """
    Require a valid session token whose user holds the CREATOR role.

    An unknown user is treated the same as one without the role.
    """

    async def dependency(
        ctx: AuthContext = Depends(get_auth_context),
        storage: StorageProvider = Depends(get_storage),
    ) -> AuthContext:
        ctx = await resolve_roles(storage, ctx)
        if not ctx.has_role(Role.CREATOR):
            logger.warning("%s lacks %s", ctx.email, Role.CREATOR.value)
            raise NotAllowed(message)
        return ctx

    return dependency


def require_if_strict(capability: Capability, message: str) -> Callable:
    """
    Authentication only, plus a capability check when
    ``strict_book_permissions`` is enabled.
    """

    async def dependency(
        ctx: AuthContext = Depends(get_auth_context),
        storage: StorageProvider = Depends(get_storage),
    ) -> AuthContext:
        if not get_settings().strict_book_permissions:
            return ctx
        ctx = await resolve_roles(storage, ctx)
        if not ctx.can(capability):
            logger.warning("%s lacks %s", ctx.email, capability.value)
            raise NotAllowed(message)
        return ctx

    return dependency

# =============================================================================
# Session Tokens and Password Hashing
# =============================================================================
#
# This module provides:
#   - Session token creation and validation (JWT, HS256 by default)
#   - Password hashing (PBKDF2-SHA256, fixed work factor)
#
# Hashing is CPU-bound, so the async variants run it in a worker thread
# and handlers can simply await it.
#
# =============================================================================

from __future__ import annotations

import asyncio
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pydantic import BaseModel

from bookshare.config import Settings, get_settings
from bookshare.core.utils import utc_now


# =============================================================================
# Models
# =============================================================================

class TokenPayload(BaseModel):
    """Decoded session token."""
    sub: str  # email
    iat: datetime
    exp: datetime | None = None


# =============================================================================
# Password Hashing
# =============================================================================

def _derive(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        iterations=iterations,
    ).hex()


def hash_password_sync(password: str, iterations: int | None = None) -> str:
    """
    Hash a password using PBKDF2-SHA256.

    Returns: iterations$salt$hash format string
    """
    iterations = iterations or get_settings().password_hash_iterations
    salt = secrets.token_hex(16)
    return f"{iterations}${salt}${_derive(password, salt, iterations)}"


def verify_password_sync(password: str, password_hash: str | None) -> bool:
    """Verify a password against its hash in constant time."""
    if not password_hash:
        return False
    try:
        iterations, salt, stored_hash = password_hash.split('$')
        candidate = _derive(password, salt, int(iterations))
    except (ValueError, AttributeError):
        return False
    return secrets.compare_digest(candidate, stored_hash)


async def hash_password(password: str, iterations: int | None = None) -> str:
    return await asyncio.to_thread(hash_password_sync, password, iterations)


async def verify_password(password: str, password_hash: str | None) -> bool:
    return await asyncio.to_thread(verify_password_sync, password, password_hash)


# =============================================================================
# Token Creation
# =============================================================================

def create_access_token(
    email: str,
    extra_claims: dict[str, Any] | None = None,
    settings: Settings | None = None,
) -> str:
    """Create a signed session token for an email."""
    settings = settings or get_settings()
    now = utc_now()

    payload: dict[str, Any] = {
        "sub": email,
        "email": email,
        "iat": now,
        **(extra_claims or {}),
    }
    if settings.jwt_access_token_expire_minutes:
        payload["exp"] = now + timedelta(minutes=settings.jwt_access_token_expire_minutes)

    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


# =============================================================================
# Token Validation
# =============================================================================

class TokenError(Exception):
    """Base exception for token errors."""
    pass


class TokenExpiredError(TokenError):
    """Token has expired."""
    pass


class TokenInvalidError(TokenError):
    """Token is invalid or malformed."""
    pass


def decode_token(token: str, settings: Settings | None = None) -> TokenPayload:
    """
    Decode and validate a session token.

    Args:
        token: The JWT string
        settings: Settings to verify against (defaults to the cached ones)

    Returns:
        TokenPayload with validated claims

    Raises:
        TokenExpiredError: Token carried an exp claim that has passed
        TokenInvalidError: Signature or format is wrong
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid token: {e}")

    exp = payload.get("exp")
    return TokenPayload(
        sub=payload["sub"],
        iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
    )

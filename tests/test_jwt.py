"""
Tests for session tokens and password hashing.
"""

import time

import jwt as pyjwt
import pytest

from bookshare.auth.jwt import (
    TokenExpiredError,
    TokenInvalidError,
    create_access_token,
    decode_token,
    hash_password,
    hash_password_sync,
    verify_password,
    verify_password_sync,
)
from bookshare.config import Settings

SECRET = "test-secret-0123456789abcdef0123456789"


@pytest.fixture
def settings():
    return Settings(jwt_secret_key=SECRET, password_hash_iterations=1000)


class TestTokens:
    def test_round_trip_subject(self, settings):
        token = create_access_token("a@example.com", settings=settings)
        payload = decode_token(token, settings=settings)
        assert payload.sub == "a@example.com"
        assert payload.exp is None

    def test_wrong_secret_is_invalid(self, settings):
        token = create_access_token("a@example.com", settings=settings)
        other = Settings(jwt_secret_key="another-secret-0123456789abcdef0123")
        with pytest.raises(TokenInvalidError):
            decode_token(token, settings=other)

    def test_garbage_is_invalid(self, settings):
        with pytest.raises(TokenInvalidError):
            decode_token("not.a.token", settings=settings)

    def test_token_without_subject_is_invalid(self, settings):
        token = pyjwt.encode({"iat": int(time.time())}, SECRET, algorithm="HS256")
        with pytest.raises(TokenInvalidError):
            decode_token(token, settings=settings)

    def test_expiry_is_opt_in(self):
        settings = Settings(jwt_secret_key=SECRET, jwt_access_token_expire_minutes=5)
        payload = decode_token(create_access_token("a@example.com", settings=settings), settings=settings)
        assert payload.exp is not None

    def test_expired_token(self):
        token = pyjwt.encode(
            {"sub": "a@example.com", "iat": int(time.time()) - 120, "exp": int(time.time()) - 60},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenExpiredError):
            decode_token(token, settings=Settings(jwt_secret_key=SECRET))


class TestPasswords:
    def test_hash_is_salted(self):
        first = hash_password_sync("p", iterations=1000)
        second = hash_password_sync("p", iterations=1000)
        assert first != second
        assert "p" not in first.split("$")

    def test_verify(self):
        hashed = hash_password_sync("correct horse", iterations=1000)
        assert verify_password_sync("correct horse", hashed)
        assert not verify_password_sync("wrong horse", hashed)

    def test_verify_rejects_missing_or_malformed_hash(self):
        assert not verify_password_sync("p", None)
        assert not verify_password_sync("p", "")
        assert not verify_password_sync("p", "no-separators")

    @pytest.mark.asyncio
    async def test_async_variants(self):
        hashed = await hash_password("p", iterations=1000)
        assert await verify_password("p", hashed)
        assert not await verify_password("q", hashed)

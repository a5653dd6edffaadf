"""
Authentication and authorization.

- jwt: session tokens and password hashing
- capabilities: the Role and Capability enums
- context: AuthContext, the verified identity of a request
- policies: FastAPI dependencies (require_auth, require_creator)
- accounts: register / login / role update flows
- routes: the credential HTTP routes

Only the leaf modules are re-exported here; import policies, accounts and
routes from their modules.
"""

from bookshare.auth.capabilities import Capability, Role
from bookshare.auth.context import AuthContext
from bookshare.auth.jwt import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

__all__ = [
    "AuthContext",
    "Capability",
    "Role",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
]

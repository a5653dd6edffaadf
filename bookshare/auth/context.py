"""
Auth context - the verified identity attached to a request.

The token only proves *who* is calling. Roles are loaded from the
credential store when a route needs them (see policies.require_creator).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bookshare.auth.capabilities import (
    Capability,
    Role,
    get_capabilities,
    parse_roles,
)


@dataclass
class AuthContext:
    """
    Authorization context for a request.

    Usage in routes:
        async def my_route(ctx: AuthContext = Depends(require_auth)):
            print(f"Request from {ctx.email}")
    """

    # Who (the token's subject)
    email: str | None = None

    # Loaded from the user record, empty until resolved
    roles: set[Role] = field(default_factory=set)

    # Raw decoded claims
    claims: dict[str, Any] = field(default_factory=dict, repr=False)

    _capabilities: set[Capability] = field(default_factory=set, repr=False)

    def __post_init__(self):
        self.roles = parse_roles(self.roles)
        self._capabilities = get_capabilities(self.roles)

    def with_roles(self, roles) -> AuthContext:
        """Return a copy of this context with roles resolved."""
        return AuthContext(email=self.email, roles=roles, claims=self.claims)

    def has_role(self, role: Role | str) -> bool:
        try:
            return Role(role) in self.roles
        except ValueError:
            return False

    def can(self, capability: Capability | str) -> bool:
        """
        Check if the identity has a capability.

        Usage:
            if ctx.can("book.edit"):
                ...
        """
        if isinstance(capability, str):
            try:
                capability = Capability(capability)
            except ValueError:
                return False
        return capability in self._capabilities

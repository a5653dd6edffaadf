"""
Roles and capabilities.

This defines WHAT users can do, not HOW we check it.
The actual checking happens in policies.py.
"""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role tags stored on a user record."""

    VIEW_ALL = "VIEW_ALL"    # Default role, read access to books
    CREATOR = "CREATOR"      # Can create and modify books


class Capability(str, Enum):
    """Fine-grained capabilities derived from a user's roles."""

    BOOK_READ = "book.read"
    BOOK_CREATE = "book.create"
    BOOK_EDIT = "book.edit"
    BOOK_DELETE = "book.delete"
    USER_ROLES_EDIT = "user.roles_edit"


# What capabilities each role grants
ROLE_CAPABILITIES: dict[Role, set[Capability]] = {
    Role.VIEW_ALL: {
        Capability.BOOK_READ,
    },
    Role.CREATOR: {
        Capability.BOOK_READ,
        Capability.BOOK_CREATE,
        Capability.BOOK_EDIT,
        Capability.BOOK_DELETE,
        Capability.USER_ROLES_EDIT,
    },
}


def parse_roles(values) -> set[Role]:
    """Convert stored role tags to Role members, dropping unknown tags."""
    roles: set[Role] = set()
    for value in values or ():
        try:
            roles.add(Role(value))
        except ValueError:
            continue
    return roles


def get_capabilities(roles) -> set[Capability]:
    """Get all capabilities granted by a set of roles."""
    caps: set[Capability] = set()
    for role in parse_roles(roles):
        caps.update(ROLE_CAPABILITIES.get(role, set()))
    return caps


def has_role(roles, role: Role | str) -> bool:
    """Explicit membership test for a role tag."""
    try:
        role = Role(role)
    except ValueError:
        return False
    return role in parse_roles(roles)

"""Identity feature.

Projects authenticated principals into immutable UserWithRoles snapshots.
"""

from .entities import Principal, RoleAssignment, UserWithRoles, IdentityProvider
from .repositories import InMemoryIdentityProvider
from .services import IdentityBinding

__all__ = [
    # Entities
    "Principal",
    "RoleAssignment",
    "UserWithRoles",

    # Protocols
    "IdentityProvider",

    # Repositories
    "InMemoryIdentityProvider",

    # Services
    "IdentityBinding",
]

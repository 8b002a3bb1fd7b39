"""Identity entities package."""

from .principal import Principal, RoleAssignment
from .user_with_roles import UserWithRoles
from .protocols import IdentityProvider, PrincipalListener

__all__ = [
    "Principal",
    "RoleAssignment",
    "UserWithRoles",
    "IdentityProvider",
    "PrincipalListener",
]

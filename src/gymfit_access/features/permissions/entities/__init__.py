"""Permission entities package.

Permission tags, the permission catalog, role definitions and protocols.
"""

from .permission import (
    PermissionCode,
    PermissionCatalog,
    PermissionLike,
    permission_value,
    REFERENCE_PERMISSIONS,
    DEFAULT_PERMISSION_CATALOG,
)
from .role import RoleDefinition
from .protocols import RoleRegistryReader, RoleDependentSession

__all__ = [
    # Domain entities
    "PermissionCode",
    "PermissionCatalog",
    "PermissionLike",
    "permission_value",
    "REFERENCE_PERMISSIONS",
    "DEFAULT_PERMISSION_CATALOG",
    "RoleDefinition",

    # Protocols
    "RoleRegistryReader",
    "RoleDependentSession",
]

"""Permissions feature.

- entities/: permission tags, catalog, role definitions and protocols
- repositories/: role registry and the built-in system roles
- services/: permission resolution and role administration

Services are imported from ``.services`` directly; they depend on the
identity feature, which itself depends on these entities.
"""

from .entities import (
    PermissionCode,
    PermissionCatalog,
    RoleDefinition,
    DEFAULT_PERMISSION_CATALOG,
    RoleRegistryReader,
)
from .repositories import InMemoryRoleRegistry, build_system_roles

__all__ = [
    # Entities
    "PermissionCode",
    "PermissionCatalog",
    "RoleDefinition",
    "DEFAULT_PERMISSION_CATALOG",

    # Protocols
    "RoleRegistryReader",

    # Repositories
    "InMemoryRoleRegistry",
    "build_system_roles",
]

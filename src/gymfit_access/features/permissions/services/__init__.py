"""Permission services: decision predicates and role administration."""

from .permission_resolver import (
    PermissionResolver,
    effective_permissions,
    has_permission,
    has_any_permission,
    has_all_permissions,
    can_access_resource,
)
from .role_administration import RoleAdministrationService

__all__ = [
    "PermissionResolver",
    "effective_permissions",
    "has_permission",
    "has_any_permission",
    "has_all_permissions",
    "can_access_resource",
    "RoleAdministrationService",
]

"""In-memory role registry.

Single source of truth for what permissions a role carries. Holds the
immutable system roles and any organization-defined custom roles.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional

from ....config.constants import Scope
from ....core.exceptions import (
    ImmutableRoleError,
    InvalidRoleError,
    RoleConflictError,
    RoleNotFoundError,
)
from ..entities.permission import DEFAULT_PERMISSION_CATALOG, PermissionCatalog
from ..entities.role import RoleDefinition
from .system_roles import build_system_roles

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {"name", "description", "color", "scope", "permissions"}


class InMemoryRoleRegistry:
    """Role registry implementation of the RoleRegistryReader protocol.

    Reads are synchronous lookups over an immutable mapping; writes replace
    the mapping as a whole so a reader never sees a half-applied edit.
    """

    def __init__(
        self,
        catalog: PermissionCatalog = DEFAULT_PERMISSION_CATALOG,
        system_roles: Optional[Iterable[RoleDefinition]] = None,
        custom_roles: Iterable[RoleDefinition] = (),
    ):
        self._catalog = catalog
        system = list(system_roles) if system_roles is not None else build_system_roles(catalog)

        roles: Dict[str, RoleDefinition] = {}
        for role in system:
            if role.id in roles:
                raise RoleConflictError(f"Duplicate system role id: {role.id}")
            catalog.validate(role.permissions)
            if not role.is_system:
                role = role.with_changes(is_system=True, updated_at=role.updated_at)
            roles[role.id] = role

        self._system_ids = tuple(roles)
        self._roles = roles

        for role in custom_roles:
            self.add_role(role)

    @property
    def catalog(self) -> PermissionCatalog:
        return self._catalog

    # Read path

    def get_role(self, role_id: str) -> Optional[RoleDefinition]:
        """Get role by id, None when absent."""
        return self._roles.get(role_id)

    def require_role(self, role_id: str) -> RoleDefinition:
        role = self._roles.get(role_id)
        if role is None:
            raise RoleNotFoundError(f"Role not found: {role_id}", details={"role_id": role_id})
        return role

    def has_role(self, role_id: str) -> bool:
        return role_id in self._roles

    def is_system_role(self, role_id: str) -> bool:
        return role_id in self._system_ids

    def list_roles(self) -> List[RoleDefinition]:
        """System roles in declaration order, then custom roles by name."""
        roles = self._roles
        system = [roles[role_id] for role_id in self._system_ids]
        custom = sorted(
            (role for role in roles.values() if not role.is_system),
            key=lambda role: (role.name.lower(), role.id),
        )
        return system + custom

    def permissions_for(self, role_id: str) -> FrozenSet[str]:
        role = self._roles.get(role_id)
        return role.permissions if role else frozenset()

    def permission_matrix(self) -> Dict[str, Dict[str, bool]]:
        """Role id -> {permission: granted} over the whole catalog."""
        return {
            role.id: {code: code in role.permissions for code in self._catalog}
            for role in self.list_roles()
        }

    # Administrative write path

    def add_role(self, role: RoleDefinition) -> RoleDefinition:
        """Register a custom role.

        Raises:
            ImmutableRoleError: The id belongs to a system role or the
                definition claims to be a system role.
            RoleConflictError: A custom role with this id already exists.
            InvalidRoleError: The role claims global scope.
            InvalidPermissionError: A permission is outside the catalog.
        """
        self._guard_system(role.id, "create")
        if role.is_system:
            raise ImmutableRoleError(
                f"System roles cannot be added at runtime: {role.id}",
                details={"role_id": role.id},
            )
        if role.id in self._roles:
            raise RoleConflictError(f"Role already exists: {role.id}", details={"role_id": role.id})
        self._validate_custom(role)

        roles = dict(self._roles)
        roles[role.id] = role
        self._roles = roles
        logger.info(f"Registered custom role {role.id} with {len(role.permissions)} permissions")
        return role

    def update_role(self, role_id: str, **changes) -> RoleDefinition:
        """Edit a custom role and return the new definition."""
        self._guard_system(role_id, "edit")
        current = self.require_role(role_id)

        unsupported = set(changes) - _EDITABLE_FIELDS
        if unsupported:
            raise InvalidRoleError(
                f"Cannot change role fields: {', '.join(sorted(unsupported))}",
                details={"role_id": role_id, "fields": sorted(unsupported)},
            )

        updated = current.with_changes(**changes)
        self._validate_custom(updated)

        roles = dict(self._roles)
        roles[role_id] = updated
        self._roles = roles
        logger.info(f"Updated custom role {role_id}: {', '.join(sorted(changes))}")
        return updated

    def remove_role(self, role_id: str) -> RoleDefinition:
        """Remove a custom role and return the removed definition."""
        self._guard_system(role_id, "delete")
        removed = self.require_role(role_id)

        roles = dict(self._roles)
        del roles[role_id]
        self._roles = roles
        logger.info(f"Removed custom role {role_id}")
        return removed

    def _guard_system(self, role_id: str, operation: str) -> None:
        if role_id in self._system_ids:
            raise ImmutableRoleError(
                f"Cannot {operation} system role: {role_id}",
                details={"role_id": role_id, "operation": operation},
            )

    def _validate_custom(self, role: RoleDefinition) -> None:
        if role.scope is Scope.GLOBAL:
            raise InvalidRoleError(
                f"Custom roles cannot have global scope: {role.id}",
                details={"role_id": role.id},
            )
        self._catalog.validate(role.permissions)

    def __len__(self) -> int:
        return len(self._roles)

    def __repr__(self) -> str:
        return (
            f"InMemoryRoleRegistry(system={len(self._system_ids)}, "
            f"custom={len(self._roles) - len(self._system_ids)})"
        )

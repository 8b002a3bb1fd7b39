"""Role domain entity for the gymfit-access permissions feature.

A role is a named bundle of permissions plus a scope class. Definitions are
immutable values; edits produce a new definition.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import FrozenSet, Iterable

from ....config.constants import Scope
from ....core.exceptions import InvalidRoleError
from .permission import PermissionCatalog, PermissionLike, permission_value

_ROLE_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RoleDefinition:
    """Immutable role definition with scope and permission set."""

    id: str
    name: str
    scope: Scope
    permissions: FrozenSet[str] = frozenset()
    description: str = ""
    color: str = "#6b7280"
    is_system: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        """Validate role definition and normalize field types."""
        if not isinstance(self.id, str) or not _ROLE_ID_PATTERN.match(self.id):
            raise InvalidRoleError(
                f"Role id must be lowercase alphanumeric with hyphens or underscores, got: {self.id!r}"
            )
        if len(self.id) > 100:
            raise InvalidRoleError(f"Role id cannot exceed 100 characters, got: {len(self.id)}")

        if not self.name or not self.name.strip():
            raise InvalidRoleError(f"Role name cannot be empty for role: {self.id}")

        try:
            object.__setattr__(self, "scope", Scope(self.scope))
        except ValueError:
            raise InvalidRoleError(
                f"Invalid scope: {self.scope}. Must be one of: {[s.value for s in Scope]}"
            )

        object.__setattr__(
            self, "permissions", frozenset(permission_value(p) for p in self.permissions)
        )

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        scope: Scope,
        permissions: Iterable[PermissionLike],
        catalog: PermissionCatalog,
        **kwargs
    ) -> "RoleDefinition":
        """Build a definition whose permissions are validated against a catalog."""
        return cls(
            id=id,
            name=name,
            scope=scope,
            permissions=catalog.validate(permissions),
            **kwargs
        )

    def has_permission(self, permission: PermissionLike) -> bool:
        return permission_value(permission) in self.permissions

    def with_changes(self, **changes) -> "RoleDefinition":
        """Return a copy with the given fields replaced and updated_at bumped."""
        if "id" in changes and changes["id"] != self.id:
            raise InvalidRoleError("Role id cannot be changed")
        changes.setdefault("updated_at", _utcnow())
        return replace(self, **changes)

    @property
    def is_platform_wide(self) -> bool:
        return self.scope is Scope.GLOBAL

    def __str__(self) -> str:
        return f"Role({self.id})"

    def __repr__(self) -> str:
        flag_info = " [system]" if self.is_system else ""
        return (
            f"RoleDefinition({self.id}, scope={self.scope.value}, "
            f"permissions={len(self.permissions)}{flag_info})"
        )


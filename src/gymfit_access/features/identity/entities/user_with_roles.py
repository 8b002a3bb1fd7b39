"""Resolved principal snapshot.

A UserWithRoles is built once per identity resolution and never mutated;
a change of identity or role assignment produces a new snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import FrozenSet, Optional, Tuple

from ....config.constants import ALL_BRANCHES, Scope
from ...permissions.entities.permission import DEFAULT_PERMISSION_CATALOG, PermissionCatalog
from ...permissions.entities.role import RoleDefinition


@dataclass(frozen=True)
class UserWithRoles:
    """Immutable resolved principal: identity, roles, overrides and branches."""

    id: str
    email: str
    role: str
    roles: Tuple[RoleDefinition, ...] = ()
    display_name: Optional[str] = None
    team_role: Optional[str] = None
    organization_id: Optional[str] = None
    custom_permissions: FrozenSet[str] = frozenset()
    denied_permissions: FrozenSet[str] = frozenset()
    branch_id: Optional[str] = None
    assigned_branches: FrozenSet[str] = frozenset()
    is_active: bool = True
    resolved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    # Role ids the identity provider asked for, known to the registry or not
    requested_role_ids: Tuple[str, ...] = ()
    catalog: PermissionCatalog = field(default=DEFAULT_PERMISSION_CATALOG, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "roles", tuple(self.roles))
        object.__setattr__(self, "custom_permissions", frozenset(self.custom_permissions))
        object.__setattr__(self, "denied_permissions", frozenset(self.denied_permissions))
        object.__setattr__(self, "assigned_branches", frozenset(self.assigned_branches))
        requested = self.requested_role_ids or (self.role, *(r.id for r in self.roles))
        object.__setattr__(self, "requested_role_ids", tuple(dict.fromkeys(requested)))

    @property
    def primary_role(self) -> Optional[RoleDefinition]:
        """Definition of the primary role, None when the role id is unknown."""
        for definition in self.roles:
            if definition.id == self.role:
                return definition
        return None

    @property
    def scope(self) -> Optional[Scope]:
        """Scope class of the primary role, None when the role is unknown."""
        primary = self.primary_role
        return primary.scope if primary else None

    @property
    def role_ids(self) -> Tuple[str, ...]:
        return tuple(definition.id for definition in self.roles)

    @property
    def has_all_branches(self) -> bool:
        return ALL_BRANCHES in self.assigned_branches

    def __repr__(self) -> str:
        return (
            f"UserWithRoles(id={self.id!r}, role={self.role!r}, "
            f"roles={list(self.role_ids)}, active={self.is_active})"
        )

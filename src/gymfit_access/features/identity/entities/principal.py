"""Principal and role assignment entities.

Both are supplied by the identity provider. The principal is the
authenticated identity; the role assignment is what the provider knows
about that identity's roles, overrides and branch assignment.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple, Union

from ....config.constants import ALL_BRANCHES


@dataclass(frozen=True)
class Principal:
    """Authenticated identity as reported by the identity provider."""

    id: str
    email: str
    role: str
    team_role: Optional[str] = None
    branch_id: Optional[str] = None
    organization_id: Optional[str] = None
    display_name: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Principal id cannot be empty")


@dataclass(frozen=True)
class RoleAssignment:
    """Per-user binding data joined against the role registry.

    Attributes:
        user_id: Principal the assignment belongs to
        roles: Role ids held in addition to the principal's primary role
        custom_permissions: Additive per-user grants
        denied_permissions: Subtractive per-user overrides (always win)
        assigned_branches: Branch ids, ``{"all"}``, or None when unset
        is_active: Inactive accounts resolve with no access
    """

    user_id: str
    roles: Tuple[str, ...] = ()
    custom_permissions: FrozenSet[str] = frozenset()
    denied_permissions: FrozenSet[str] = frozenset()
    assigned_branches: Optional[FrozenSet[str]] = None
    is_active: bool = True

    def __post_init__(self):
        object.__setattr__(self, "roles", tuple(self.roles))
        object.__setattr__(self, "custom_permissions", frozenset(self.custom_permissions))
        object.__setattr__(self, "denied_permissions", frozenset(self.denied_permissions))
        if self.assigned_branches is not None:
            object.__setattr__(self, "assigned_branches", _normalize_branches(self.assigned_branches))


def _normalize_branches(branches: Union[str, FrozenSet[str]]) -> FrozenSet[str]:
    """Accept the bare ``"all"`` sentinel as well as any iterable of ids."""
    if isinstance(branches, str):
        return frozenset({branches})
    values = frozenset(branches)
    if ALL_BRANCHES in values:
        return frozenset({ALL_BRANCHES})
    return values

"""Access snapshot published by the authorization context.

A snapshot bundles the resolved user, the directory listing it was
resolved against and the decision resolvers derived from both. It is
replaced wholesale on every identity change, which also discards any
memoized decision state.
"""

from dataclasses import dataclass, field
from typing import Optional

from ...branches.entities.branch import BranchDirectorySnapshot
from ...branches.services.branch_scope_resolver import BranchScopeResolver
from ...identity.entities.principal import Principal
from ...identity.entities.user_with_roles import UserWithRoles
from ...permissions.services.permission_resolver import PermissionResolver


@dataclass(frozen=True)
class AccessSnapshot:
    """Immutable decision state for one identity resolution."""

    generation: int
    principal: Optional[Principal] = None
    user: Optional[UserWithRoles] = None
    directory: Optional[BranchDirectorySnapshot] = None
    resolving: bool = False
    permissions: PermissionResolver = field(init=False, repr=False, compare=False)
    branches: BranchScopeResolver = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # A snapshot still resolving never carries decision data
        user = None if self.resolving else self.user
        object.__setattr__(self, "permissions", PermissionResolver(user))
        object.__setattr__(self, "branches", BranchScopeResolver(user, self.directory))

    @classmethod
    def empty(cls, generation: int = 0, principal: Optional[Principal] = None, resolving: bool = False) -> "AccessSnapshot":
        return cls(generation=generation, principal=principal, resolving=resolving)

    @property
    def is_resolved(self) -> bool:
        return not self.resolving and self.user is not None

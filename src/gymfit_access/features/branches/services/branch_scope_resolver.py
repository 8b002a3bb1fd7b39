"""Branch scope resolution.

Answers which branches a resolved user may operate on, from the scope
class of the user's primary role and the organization's directory
snapshot:

* global scope: every branch id, including other organizations' branches
  and ids absent from any directory; enumerated as ``["all"]``
* organization scope: every branch listed by the directory
* branch and self scope: assigned branches that the directory lists

A missing, inactive or unknown-role user has no access. An unavailable
directory denies everything except global scope.
"""

from typing import List, Optional

from ....config.constants import ALL_BRANCHES, Scope
from ...identity.entities.user_with_roles import UserWithRoles
from ..entities.branch import BranchDirectorySnapshot


class BranchScopeResolver:
    """Branch access decisions bound to one (user, directory) snapshot pair."""

    __slots__ = ("_user", "_directory", "_scope", "_accessible")

    def __init__(self, user: Optional[UserWithRoles], directory: Optional[BranchDirectorySnapshot] = None):
        self._user = user
        self._directory = directory or BranchDirectorySnapshot.empty(user.organization_id if user else None)
        self._scope = user.scope if user is not None and user.is_active else None
        self._accessible = self._compute_accessible()

    @property
    def scope(self) -> Optional[Scope]:
        """Effective scope, None when the user has no branch access at all."""
        return self._scope

    @property
    def directory(self) -> BranchDirectorySnapshot:
        return self._directory

    def can_access_branch(self, branch_id: str) -> bool:
        if self._scope is None or not isinstance(branch_id, str):
            return False
        if self._scope is Scope.GLOBAL:
            return True
        return branch_id in self._accessible

    def get_accessible_branches(self) -> List[str]:
        """Accessible branch ids in directory order, or ``["all"]`` for global scope."""
        if self._scope is Scope.GLOBAL:
            return [ALL_BRANCHES]
        return list(self._accessible)

    def get_current_branch_id(self) -> Optional[str]:
        """The user's home branch, else the first accessible directory branch."""
        if self._scope is None:
            return None
        if self._user.branch_id:
            return self._user.branch_id
        for branch_id in self._directory.branch_ids():
            if self.can_access_branch(branch_id):
                return branch_id
        return None

    def _compute_accessible(self) -> tuple:
        if self._scope is None or self._scope is Scope.GLOBAL:
            return ()
        directory = self._directory
        if not directory.available:
            return ()

        listed = directory.branch_ids()
        if self._scope is Scope.ORGANIZATION:
            return listed

        assigned = self._user.assigned_branches
        if ALL_BRANCHES in assigned:
            return listed
        return tuple(branch_id for branch_id in listed if branch_id in assigned)


def can_access_branch(
    user: Optional[UserWithRoles],
    directory: Optional[BranchDirectorySnapshot],
    branch_id: str,
) -> bool:
    return BranchScopeResolver(user, directory).can_access_branch(branch_id)


def get_accessible_branches(
    user: Optional[UserWithRoles],
    directory: Optional[BranchDirectorySnapshot],
) -> List[str]:
    return BranchScopeResolver(user, directory).get_accessible_branches()


def get_current_branch_id(
    user: Optional[UserWithRoles],
    directory: Optional[BranchDirectorySnapshot],
) -> Optional[str]:
    return BranchScopeResolver(user, directory).get_current_branch_id()

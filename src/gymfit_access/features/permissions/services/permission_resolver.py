"""Permission resolution over a resolved principal snapshot.

    effective(user) = (union of role permissions | custom grants) - denials

Denial always wins: the subtraction is applied last, regardless of how
many roles or grants confer a permission. Tags outside the user's
permission catalog are never effective, whoever built the snapshot.
Every predicate fails closed for a missing or inactive user and never
raises.
"""

from typing import FrozenSet, Iterable, Optional

from ...identity.entities.user_with_roles import UserWithRoles
from ..entities.permission import PermissionLike, permission_value


def effective_permissions(user: Optional[UserWithRoles]) -> FrozenSet[str]:
    """Compute the effective permission set of a user snapshot."""
    if user is None or not user.is_active:
        return frozenset()

    granted = set(user.custom_permissions)
    for role in user.roles:
        granted.update(role.permissions)
    return frozenset((granted - user.denied_permissions) & user.catalog.codes)


def has_permission(user: Optional[UserWithRoles], permission: PermissionLike) -> bool:
    return _contains(effective_permissions(user), permission)


def has_any_permission(user: Optional[UserWithRoles], permissions: Iterable[PermissionLike]) -> bool:
    return _any(effective_permissions(user), permissions)


def has_all_permissions(user: Optional[UserWithRoles], permissions: Iterable[PermissionLike]) -> bool:
    return _all(effective_permissions(user), permissions)


def can_access_resource(user: Optional[UserWithRoles], resource: str, action: str) -> bool:
    return _contains(effective_permissions(user), _compose(resource, action))


def _compose(resource: object, action: object) -> Optional[str]:
    if not isinstance(resource, str) or not isinstance(action, str):
        return None
    return f"{resource}.{action}"


def _contains(effective: FrozenSet[str], permission: object) -> bool:
    try:
        return permission_value(permission) in effective
    except TypeError:
        # unhashable input
        return False


def _any(effective: FrozenSet[str], permissions: Iterable[PermissionLike]) -> bool:
    if not effective or permissions is None:
        return False
    try:
        return any(_contains(effective, p) for p in permissions)
    except TypeError:
        # not iterable
        return False


def _all(effective: FrozenSet[str], permissions: Iterable[PermissionLike]) -> bool:
    if not effective or permissions is None:
        return False
    try:
        required = list(permissions)
    except TypeError:
        return False
    # An empty requirement grants nothing on its own
    if not required:
        return False
    return all(_contains(effective, p) for p in required)


class PermissionResolver:
    """Permission predicates bound to one snapshot.

    The effective set is computed once at construction; a new snapshot
    gets a new resolver, so there is nothing to invalidate.
    """

    __slots__ = ("_user", "_effective")

    def __init__(self, user: Optional[UserWithRoles]):
        self._user = user
        self._effective = effective_permissions(user)

    @property
    def user(self) -> Optional[UserWithRoles]:
        return self._user

    @property
    def effective(self) -> FrozenSet[str]:
        return self._effective

    def has_permission(self, permission: PermissionLike) -> bool:
        return _contains(self._effective, permission)

    def has_any_permission(self, permissions: Iterable[PermissionLike]) -> bool:
        return _any(self._effective, permissions)

    def has_all_permissions(self, permissions: Iterable[PermissionLike]) -> bool:
        return _all(self._effective, permissions)

    def can_access_resource(self, resource: str, action: str) -> bool:
        return _contains(self._effective, _compose(resource, action))

    def get_user_permissions(self) -> FrozenSet[str]:
        return self._effective

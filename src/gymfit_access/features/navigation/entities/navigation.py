"""Navigation and access gate entities.

Declarative requirements attached to routes, menu items and UI gates. A
requirement is evaluated against the current decision snapshot; it never
grants anything the permission and role checks would not.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from ....config.constants import SystemRole

DEFAULT_PRIORITY = 999


def _as_frozenset(values) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        return frozenset({values})
    return frozenset(str(v.value if hasattr(v, "value") else v) for v in values)


@dataclass(frozen=True)
class AccessRequirement:
    """Conditions a user must meet to see or enter something.

    When ``resource`` and ``action`` are both set the requirement is a
    plain permission gate on ``resource.action`` and the other fields are
    ignored.
    """

    allowed_roles: FrozenSet[str] = frozenset()
    required_permissions: Tuple[str, ...] = ()
    require_all: bool = False
    team_role: Optional[str] = None
    excluded_team_roles: FrozenSet[str] = frozenset()
    member_only: bool = False
    resource: Optional[str] = None
    action: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "allowed_roles", _as_frozenset(self.allowed_roles))
        object.__setattr__(self, "excluded_team_roles", _as_frozenset(self.excluded_team_roles))
        permissions = self.required_permissions
        if isinstance(permissions, str):
            permissions = (permissions,)
        object.__setattr__(self, "required_permissions", tuple(permissions))
        if (self.resource is None) != (self.action is None):
            raise ValueError("resource and action must be given together")

    @property
    def is_resource_gate(self) -> bool:
        return self.resource is not None and self.action is not None

    @property
    def is_empty(self) -> bool:
        return not (
            self.allowed_roles
            or self.required_permissions
            or self.team_role
            or self.excluded_team_roles
            or self.member_only
            or self.is_resource_gate
        )

    @classmethod
    def for_resource(cls, resource: str, action: str) -> "AccessRequirement":
        return cls(resource=resource, action=action)

    @classmethod
    def members_only(cls) -> "AccessRequirement":
        return cls(allowed_roles=frozenset({SystemRole.MEMBER.value}), member_only=True)


OPEN = AccessRequirement()


@dataclass(frozen=True)
class NavigationItem:
    id: str
    title: str
    url: str
    group: str
    requirement: AccessRequirement = OPEN
    exact_match: bool = False
    badge: Optional[str] = None
    disabled: bool = False

    def matches(self, route: str) -> bool:
        """Whether the route equals this item's url or, unless exact, lies under it."""
        if route == self.url:
            return True
        if self.exact_match or not self.url:
            return False
        prefix = self.url if self.url.endswith("/") else self.url + "/"
        return route.startswith(prefix)


@dataclass(frozen=True)
class NavigationGroup:
    id: str
    title: str
    items: Tuple[NavigationItem, ...] = ()
    requirement: AccessRequirement = OPEN
    priority: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def sort_priority(self) -> int:
        return self.priority if self.priority is not None else DEFAULT_PRIORITY

    def with_items(self, items) -> "NavigationGroup":
        return NavigationGroup(
            id=self.id,
            title=self.title,
            items=tuple(items),
            requirement=self.requirement,
            priority=self.priority,
        )

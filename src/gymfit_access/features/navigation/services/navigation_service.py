"""Access gates and role-aware navigation.

``evaluate_requirement`` is the single check behind route guards,
permission gates and menu filtering. It accepts an authorization context,
an access snapshot or a bare resolved user.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ....config.constants import DEFAULT_ROUTE, SystemRole
from ...identity.entities.user_with_roles import UserWithRoles
from ...permissions.services.permission_resolver import PermissionResolver
from ...session.entities.access_snapshot import AccessSnapshot
from ...session.services.authorization_context import AuthorizationContext
from ..entities.navigation import AccessRequirement, NavigationGroup, NavigationItem
from ..repositories.default_navigation import DEFAULT_NAVIGATION, ROLE_DEFAULT_ROUTES

logger = logging.getLogger(__name__)

Subject = Union[AuthorizationContext, AccessSnapshot, UserWithRoles, None]


def _resolve_subject(subject: Subject) -> Tuple[Optional[UserWithRoles], PermissionResolver]:
    if isinstance(subject, AuthorizationContext):
        subject = subject.snapshot
    if isinstance(subject, AccessSnapshot):
        user = None if subject.resolving else subject.user
        return user, subject.permissions
    if isinstance(subject, UserWithRoles):
        return subject, PermissionResolver(subject)
    return None, PermissionResolver(None)


def evaluate_requirement(subject: Subject, requirement: AccessRequirement) -> bool:
    """Whether the subject satisfies every condition of the requirement.

    An unresolved, inactive or missing user never passes.
    """
    user, permissions = _resolve_subject(subject)
    if user is None or not user.is_active:
        return False

    if requirement.is_resource_gate:
        return permissions.can_access_resource(requirement.resource, requirement.action)

    if requirement.allowed_roles:
        held = set(user.role_ids) | {user.role}
        if user.team_role:
            held.add(user.team_role)
        if not held & requirement.allowed_roles:
            return False

    if requirement.team_role and user.team_role != requirement.team_role:
        return False

    if user.team_role and user.team_role in requirement.excluded_team_roles:
        return False

    if requirement.member_only and user.role != SystemRole.MEMBER.value:
        return False

    if requirement.required_permissions:
        if requirement.require_all:
            return permissions.has_all_permissions(requirement.required_permissions)
        return permissions.has_any_permission(requirement.required_permissions)

    return True


class NavigationService:
    """Filters navigation and guards routes for the current user."""

    def __init__(
        self,
        groups: Iterable[NavigationGroup] = DEFAULT_NAVIGATION,
        default_routes: Optional[Mapping[str, str]] = None,
    ):
        self.groups: Tuple[NavigationGroup, ...] = tuple(groups)
        self.default_routes: Dict[str, str] = dict(
            ROLE_DEFAULT_ROUTES if default_routes is None else default_routes
        )

    def visible_navigation(self, subject: Subject) -> List[NavigationGroup]:
        """Groups and items the subject may see, ordered by group priority."""
        visible = []
        for group in self.groups:
            if not evaluate_requirement(subject, group.requirement):
                continue
            items = [item for item in group.items if evaluate_requirement(subject, item.requirement)]
            if items:
                visible.append(group.with_items(items))
        # sorted() is stable: equal priorities keep declaration order
        return sorted(visible, key=lambda group: group.sort_priority)

    def find_item(self, route: str) -> Optional[NavigationItem]:
        """The item guarding a route: an exact url match, else the first prefix match."""
        items = [item for group in self.groups for item in group.items]
        for item in items:
            if item.url == route:
                return item
        for item in items:
            if item.matches(route):
                return item
        return None

    def is_route_accessible(self, route: str, subject: Subject) -> bool:
        item = self.find_item(route)
        if item is None:
            logger.debug(f"Route {route!r} is not part of the navigation, denying")
            return False
        return evaluate_requirement(subject, item.requirement)

    def default_route_for(self, role: Optional[str]) -> str:
        return self.default_routes.get(role, DEFAULT_ROUTE) if role else DEFAULT_ROUTE

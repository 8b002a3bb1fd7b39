"""Navigation feature.

Route guards, permission gates and role-aware menus built on the
authorization context.
"""

from .entities import AccessRequirement, NavigationItem, NavigationGroup
from .repositories import DEFAULT_NAVIGATION, ROLE_DEFAULT_ROUTES
from .services import NavigationService, evaluate_requirement

__all__ = [
    "AccessRequirement",
    "NavigationItem",
    "NavigationGroup",
    "DEFAULT_NAVIGATION",
    "ROLE_DEFAULT_ROUTES",
    "NavigationService",
    "evaluate_requirement",
]

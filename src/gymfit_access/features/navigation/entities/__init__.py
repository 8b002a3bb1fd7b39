"""Navigation entities package."""

from .navigation import AccessRequirement, NavigationItem, NavigationGroup, DEFAULT_PRIORITY

__all__ = [
    "AccessRequirement",
    "NavigationItem",
    "NavigationGroup",
    "DEFAULT_PRIORITY",
]

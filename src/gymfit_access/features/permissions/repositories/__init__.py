"""Role registry implementations."""

from .role_registry import InMemoryRoleRegistry
from .system_roles import (
    build_system_roles,
    PLATFORM_ONLY_PERMISSIONS,
    TEAM_PERMISSIONS,
    MEMBER_PERMISSIONS,
)

__all__ = [
    "InMemoryRoleRegistry",
    "build_system_roles",
    "PLATFORM_ONLY_PERMISSIONS",
    "TEAM_PERMISSIONS",
    "MEMBER_PERMISSIONS",
]

"""Constants and enums for gymfit-access.

This module defines the constants, enums, and configuration values
shared by the authorization core. Role identifiers and scope classes
correspond to the values stored by the identity provider.
"""

from enum import Enum
from typing import Final


# Sentinel returned instead of enumerating branches for platform-wide roles
ALL_BRANCHES: Final[str] = "all"

DEFAULT_ROUTE: Final[str] = "/dashboard"


class Scope(str, Enum):
    """Breadth of organizational reach a role is entitled to."""

    GLOBAL = "global"              # every branch of every organization
    ORGANIZATION = "organization"  # every branch of the user's organization
    BRANCH = "branch"              # assigned branches only
    SELF = "self"                  # own records at the assigned branch


class SystemRole(str, Enum):
    """Built-in role identifiers of the reference deployment."""

    SUPER_ADMIN = "super-admin"
    ADMIN = "admin"
    TEAM = "team"
    MEMBER = "member"


class TeamRole(str, Enum):
    """Sub-classification within the team role. Carries no permissions."""

    MANAGER = "manager"
    STAFF = "staff"
    TRAINER = "trainer"


class BranchStatus(str, Enum):
    """Branch lifecycle status as reported by the branch directory."""

    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"


class AuditAction(str, Enum):
    """Audit log action names recorded by the core."""

    ROLE_CREATED = "role.created"
    ROLE_UPDATED = "role.updated"
    ROLE_DELETED = "role.deleted"
    ROLE_UNKNOWN = "role.unknown"
    ACCESS_DENIED = "access.denied"
    BRANCH_DENIED = "branch.denied"


class AuditBackend(str, Enum):
    """Supported audit store backends."""

    MEMORY = "memory"
    REDIS = "redis"


class AuditDefaults:
    """Audit log defaults."""

    MAX_ENTRIES: Final[int] = 1000
    REDIS_KEY: Final[str] = "gymfit:audit:entries"

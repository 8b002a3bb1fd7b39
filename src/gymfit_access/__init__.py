"""gymfit-access - authorization core for the multi-tenant gym management app.

Decides what an authenticated user may see and do: role and permission
resolution, branch scoping, role administration, audit logging and
role-aware navigation.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    ALL_BRANCHES,
    DEFAULT_ROUTE,
    Scope,
    SystemRole,
    TeamRole,
    BranchStatus,
    AuditAction,
    AuditBackend,
    AccessSettings,
    get_settings,
    get_logger,
)

from .core.exceptions import (
    # Base Exception
    GymAccessError,

    # Domain Exceptions
    ConfigurationError,
    AuthorizationError,
    InvalidPermissionError,
    InvalidRoleError,
    RoleNotFoundError,
    RoleConflictError,
    ImmutableRoleError,
    UnknownRoleError,

    # Infrastructure Exceptions
    IdentityResolutionError,
    DirectoryUnavailableError,
    AuditLogUnavailableError,

    # Utility Functions
    create_error_response,
)

# Permissions
from .features.permissions.entities import (
    PermissionCode,
    PermissionCatalog,
    RoleDefinition,
    DEFAULT_PERMISSION_CATALOG,
    RoleRegistryReader,
)
from .features.permissions.repositories import InMemoryRoleRegistry, build_system_roles
from .features.permissions.services import PermissionResolver, RoleAdministrationService

# Identity
from .features.identity import (
    Principal,
    RoleAssignment,
    UserWithRoles,
    IdentityProvider,
    InMemoryIdentityProvider,
    IdentityBinding,
)

# Branches
from .features.branches import (
    Branch,
    BranchDirectorySnapshot,
    BranchDirectory,
    InMemoryBranchDirectory,
    BranchScopeResolver,
)

# Audit
from .features.audit import (
    AuditEntry,
    AuditStore,
    InMemoryAuditStore,
    RedisAuditStore,
    AuditLog,
    build_audit_log,
)

# Session
from .features.session import AccessSnapshot, AuthorizationContext

# Navigation
from .features.navigation import (
    AccessRequirement,
    NavigationItem,
    NavigationGroup,
    NavigationService,
    evaluate_requirement,
)

__all__ = [
    "__version__",

    # Configuration
    "ALL_BRANCHES",
    "DEFAULT_ROUTE",
    "Scope",
    "SystemRole",
    "TeamRole",
    "BranchStatus",
    "AuditAction",
    "AuditBackend",
    "AccessSettings",
    "get_settings",
    "get_logger",
    "setup_logging",

    # Exceptions
    "GymAccessError",
    "ConfigurationError",
    "AuthorizationError",
    "InvalidPermissionError",
    "InvalidRoleError",
    "RoleNotFoundError",
    "RoleConflictError",
    "ImmutableRoleError",
    "UnknownRoleError",
    "IdentityResolutionError",
    "DirectoryUnavailableError",
    "AuditLogUnavailableError",
    "create_error_response",

    # Permissions
    "PermissionCode",
    "PermissionCatalog",
    "RoleDefinition",
    "DEFAULT_PERMISSION_CATALOG",
    "RoleRegistryReader",
    "InMemoryRoleRegistry",
    "build_system_roles",
    "PermissionResolver",
    "RoleAdministrationService",

    # Identity
    "Principal",
    "RoleAssignment",
    "UserWithRoles",
    "IdentityProvider",
    "InMemoryIdentityProvider",
    "IdentityBinding",

    # Branches
    "Branch",
    "BranchDirectorySnapshot",
    "BranchDirectory",
    "InMemoryBranchDirectory",
    "BranchScopeResolver",

    # Audit
    "AuditEntry",
    "AuditStore",
    "InMemoryAuditStore",
    "RedisAuditStore",
    "AuditLog",
    "build_audit_log",

    # Session
    "AccessSnapshot",
    "AuthorizationContext",

    # Navigation
    "AccessRequirement",
    "NavigationItem",
    "NavigationGroup",
    "NavigationService",
    "evaluate_requirement",
]

"""Exceptions module for gymfit-access.

Complete exception hierarchy, organized by domain concerns and
infrastructure concerns.
"""

from .base import (
    GymAccessError,
    create_error_response,
)

from .domain import (
    # Configuration Errors
    ConfigurationError,

    # Authorization Errors
    AuthorizationError,
    InvalidPermissionError,
    InvalidRoleError,
    RoleNotFoundError,
    RoleConflictError,
    ImmutableRoleError,
    UnknownRoleError,
)

from .infrastructure import (
    IdentityResolutionError,
    DirectoryUnavailableError,
    AuditLogUnavailableError,
)

__all__ = [
    # Base
    "GymAccessError",
    "create_error_response",

    # Configuration Errors
    "ConfigurationError",

    # Authorization Errors
    "AuthorizationError",
    "InvalidPermissionError",
    "InvalidRoleError",
    "RoleNotFoundError",
    "RoleConflictError",
    "ImmutableRoleError",
    "UnknownRoleError",

    # Infrastructure Errors
    "IdentityResolutionError",
    "DirectoryUnavailableError",
    "AuditLogUnavailableError",
]

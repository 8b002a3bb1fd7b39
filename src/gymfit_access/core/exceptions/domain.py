"""Domain-specific exceptions for gymfit-access.

Authorization errors are raised only on administrative write paths and on
value object construction. Decision queries never raise.
"""

from .base import GymAccessError


# Configuration Errors
class ConfigurationError(GymAccessError):
    """Raised when there's a configuration issue."""
    pass


# Authorization Errors
class AuthorizationError(GymAccessError):
    """Base class for authorization-related errors."""
    pass


class InvalidPermissionError(AuthorizationError):
    """Raised when a permission tag is malformed or outside the catalog."""
    pass


class InvalidRoleError(AuthorizationError):
    """Raised when a role definition is malformed."""
    pass


class RoleNotFoundError(AuthorizationError):
    """Raised when a required role is absent from the registry."""
    pass


class RoleConflictError(AuthorizationError):
    """Raised when a custom role id is already registered."""
    pass


class ImmutableRoleError(AuthorizationError):
    """Raised on any attempt to create, edit or delete a system role."""
    pass


class UnknownRoleError(AuthorizationError):
    """A principal references a role id absent from the registry.

    Resolution fails closed instead of raising; the class is used as the
    audit reason code.
    """
    pass

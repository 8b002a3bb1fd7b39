"""Infrastructure-specific exceptions for gymfit-access.

Exceptions raised by the external collaborators the core depends on:
the identity provider, the branch directory and the audit store.
"""

from .base import GymAccessError


class IdentityResolutionError(GymAccessError):
    """Raised when the identity provider fails to return a role assignment."""
    pass


class DirectoryUnavailableError(GymAccessError):
    """Raised when the branch directory lookup fails."""
    pass


class AuditLogUnavailableError(GymAccessError):
    """Raised when an audit entry cannot be written to its store."""
    pass

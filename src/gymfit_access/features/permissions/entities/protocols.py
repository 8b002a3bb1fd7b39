"""Protocol interfaces for the permissions feature.

Defines the read contract of the role registry so that identity binding
and administration depend on an interface rather than the in-memory
implementation.
"""

from abc import abstractmethod
from typing import FrozenSet, List, Optional, Protocol, runtime_checkable

from .permission import PermissionCatalog
from .role import RoleDefinition


@runtime_checkable
class RoleRegistryReader(Protocol):
    """Protocol for read access to role definitions."""

    @property
    def catalog(self) -> PermissionCatalog:
        """Permission catalog the registry validates against."""
        ...

    @abstractmethod
    def get_role(self, role_id: str) -> Optional[RoleDefinition]:
        """Get role by id, None when absent."""
        ...

    @abstractmethod
    def list_roles(self) -> List[RoleDefinition]:
        """List all roles in stable order."""
        ...

    @abstractmethod
    def permissions_for(self, role_id: str) -> FrozenSet[str]:
        """Permission set of a role, empty for unknown ids."""
        ...


@runtime_checkable
class RoleDependentSession(Protocol):
    """Protocol for sessions that must re-resolve after a role edit."""

    @abstractmethod
    def depends_on_role(self, role_id: str) -> bool:
        """Whether a change to the role could alter the session's decisions."""
        ...

    @abstractmethod
    async def refresh(self) -> object:
        """Re-resolve the session's principal."""
        ...

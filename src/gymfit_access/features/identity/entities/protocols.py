"""Protocol interfaces for the identity provider collaborator."""

from abc import abstractmethod
from typing import Awaitable, Callable, Optional, Protocol, runtime_checkable

from .principal import Principal, RoleAssignment

PrincipalListener = Callable[[Optional[Principal]], Awaitable[None]]


@runtime_checkable
class IdentityProvider(Protocol):
    """Protocol for the source of authenticated principals and their bindings."""

    @abstractmethod
    async def get_current_principal(self) -> Optional[Principal]:
        """Return the authenticated principal, None when signed out."""
        ...

    @abstractmethod
    async def get_assignment(self, principal_id: str) -> Optional[RoleAssignment]:
        """Return the principal's role assignment, None when unbound."""
        ...

    @abstractmethod
    def subscribe(self, listener: PrincipalListener) -> Callable[[], None]:
        """Register a change listener (sign-in, sign-out, profile or role update).

        Returns:
            Callable that removes the listener
        """
        ...

"""In-memory identity provider.

Holds principals and their role assignments in dictionaries owned by the
instance. Used by tests, local development and embedding applications
that already keep the signed-in identity in memory.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..entities.principal import Principal, RoleAssignment
from ..entities.protocols import PrincipalListener

logger = logging.getLogger(__name__)


class InMemoryIdentityProvider:
    """IdentityProvider implementation backed by instance dictionaries."""

    def __init__(
        self,
        principals: Iterable[Principal] = (),
        assignments: Iterable[RoleAssignment] = (),
    ):
        self._principals: Dict[str, Principal] = {p.id: p for p in principals}
        self._assignments: Dict[str, RoleAssignment] = {a.user_id: a for a in assignments}
        self._current_id: Optional[str] = None
        self._listeners: List[PrincipalListener] = []

    async def get_current_principal(self) -> Optional[Principal]:
        if self._current_id is None:
            return None
        return self._principals.get(self._current_id)

    async def get_assignment(self, principal_id: str) -> Optional[RoleAssignment]:
        return self._assignments.get(principal_id)

    def subscribe(self, listener: PrincipalListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add_principal(self, principal: Principal, assignment: Optional[RoleAssignment] = None) -> None:
        self._principals[principal.id] = principal
        if assignment is not None:
            self._assignments[principal.id] = assignment

    async def sign_in(self, principal_id: str) -> Principal:
        """Make a known principal current and notify listeners."""
        principal = self._principals.get(principal_id)
        if principal is None:
            raise KeyError(f"Unknown principal: {principal_id}")
        self._current_id = principal_id
        logger.info(f"Principal {principal_id} signed in")
        await self._notify(principal)
        return principal

    async def sign_out(self) -> None:
        self._current_id = None
        logger.info("Principal signed out")
        await self._notify(None)

    async def update_principal(self, principal: Principal) -> None:
        """Replace a principal's profile; listeners hear about the current one."""
        self._principals[principal.id] = principal
        if principal.id == self._current_id:
            await self._notify(principal)

    async def set_assignment(self, assignment: RoleAssignment) -> None:
        """Replace a role assignment; listeners hear about the current one."""
        self._assignments[assignment.user_id] = assignment
        if assignment.user_id == self._current_id:
            await self._notify(self._principals.get(assignment.user_id))

    async def _notify(self, principal: Optional[Principal]) -> None:
        for listener in list(self._listeners):
            await listener(principal)

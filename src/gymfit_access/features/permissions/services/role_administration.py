"""Role administration service.

The write path of the role registry. Every successful edit is recorded in
the audit log and triggers a fresh identity binding for each registered
session the edit can affect.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ....config.constants import AuditAction, Scope
from ....core.exceptions import AuditLogUnavailableError
from ...audit.services.audit_log_service import AuditLog
from ..entities.permission import PermissionLike
from ..entities.protocols import RoleDependentSession
from ..entities.role import RoleDefinition
from ..repositories.role_registry import InMemoryRoleRegistry

logger = logging.getLogger(__name__)


class RoleAdministrationService:
    """Creates, edits and removes custom roles."""

    def __init__(self, registry: InMemoryRoleRegistry, audit_log: Optional[AuditLog] = None):
        self.registry = registry
        self.audit_log = audit_log
        self._sessions: List[RoleDependentSession] = []

    def register_session(self, session: RoleDependentSession) -> None:
        if session not in self._sessions:
            self._sessions.append(session)

    def unregister_session(self, session: RoleDependentSession) -> None:
        if session in self._sessions:
            self._sessions.remove(session)

    async def create_role(
        self,
        role_id: str,
        name: str,
        scope: Scope,
        permissions: Iterable[PermissionLike] = (),
        actor_id: Optional[str] = None,
        **kwargs
    ) -> RoleDefinition:
        """Create a custom role.

        Raises:
            InvalidPermissionError: A permission is outside the catalog
            ImmutableRoleError: The id belongs to a system role
            RoleConflictError: The id is already taken
            InvalidRoleError: The definition is not a valid custom role
        """
        role = RoleDefinition.create(
            id=role_id,
            name=name,
            scope=scope,
            permissions=permissions,
            catalog=self.registry.catalog,
            **kwargs
        )
        self.registry.add_role(role)

        await self._audit(
            actor_id,
            AuditAction.ROLE_CREATED,
            role.id,
            {"scope": role.scope.value, "permissions": sorted(role.permissions)},
        )
        await self._refresh_sessions(role.id)
        return role

    async def update_role(self, role_id: str, actor_id: Optional[str] = None, **changes) -> RoleDefinition:
        """Edit a custom role; only the given fields change."""
        before = self.registry.require_role(role_id)
        updated = self.registry.update_role(role_id, **changes)

        metadata: Dict[str, Any] = {"fields": sorted(changes)}
        if "permissions" in changes:
            metadata["added"] = sorted(updated.permissions - before.permissions)
            metadata["removed"] = sorted(before.permissions - updated.permissions)
        await self._audit(actor_id, AuditAction.ROLE_UPDATED, role_id, metadata)
        await self._refresh_sessions(role_id)
        return updated

    async def delete_role(self, role_id: str, actor_id: Optional[str] = None) -> RoleDefinition:
        removed = self.registry.remove_role(role_id)
        await self._audit(actor_id, AuditAction.ROLE_DELETED, role_id, {"name": removed.name})
        await self._refresh_sessions(role_id)
        return removed

    async def _audit(
        self,
        actor_id: Optional[str],
        action: AuditAction,
        role_id: str,
        metadata: Dict[str, Any],
    ) -> None:
        if self.audit_log is None:
            return
        try:
            await self.audit_log.record(AuditLog.role_changed(actor_id, action, role_id, metadata))
        except AuditLogUnavailableError as e:
            # The registry write has already been applied
            logger.error(f"Role {role_id} {action.value} applied but not audited: {e}")

    async def _refresh_sessions(self, role_id: str) -> None:
        affected = [session for session in self._sessions if session.depends_on_role(role_id)]
        if affected:
            logger.info(f"Refreshing {len(affected)} session(s) after change to role {role_id}")
        for session in affected:
            await session.refresh()

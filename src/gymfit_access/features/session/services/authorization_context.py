"""Authorization context for a client session.

Owns the session's current access snapshot and exposes the synchronous
decision API consumed by UI and business-logic callers. Identity changes
are handled as explicit events:

    principal changed -> identity binding -> publish new snapshot

Only the latest resolution is committed; a resolution that completes after
a newer one started is discarded. While a resolution is in flight every
decision fails closed.
"""

import asyncio
import logging
from typing import Callable, FrozenSet, Iterable, List, Optional

from ....config.settings import AccessSettings, get_settings
from ...audit.services.audit_log_service import AuditLog
from ...identity.entities.principal import Principal
from ...identity.entities.protocols import IdentityProvider
from ...identity.entities.user_with_roles import UserWithRoles
from ...identity.services.identity_binding import IdentityBinding
from ...permissions.entities.permission import PermissionLike, permission_value
from ..entities.access_snapshot import AccessSnapshot

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[AccessSnapshot], None]


class AuthorizationContext:
    """Session-scoped owner of the resolved identity and its decisions."""

    def __init__(
        self,
        binding: IdentityBinding,
        audit_log: Optional[AuditLog] = None,
        settings: Optional[AccessSettings] = None,
    ):
        self._binding = binding
        self._audit_log = audit_log
        self._settings = settings or get_settings()
        self._audited_permissions: FrozenSet[str] = frozenset(self._settings.audited_permissions)
        self._generation = 0
        self._principal: Optional[Principal] = None
        self._snapshot = AccessSnapshot.empty()
        self._listeners: List[SnapshotListener] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

    # State

    @property
    def snapshot(self) -> AccessSnapshot:
        return self._snapshot

    @property
    def current_user(self) -> Optional[UserWithRoles]:
        """Resolved user, None while signed out or resolving."""
        snapshot = self._snapshot
        return None if snapshot.resolving else snapshot.user

    @property
    def principal(self) -> Optional[Principal]:
        return self._principal

    @property
    def is_resolving(self) -> bool:
        return self._snapshot.resolving

    # Identity lifecycle

    def attach(self, provider: Optional[IdentityProvider] = None) -> None:
        """Subscribe to principal change notifications of the provider."""
        self.detach()
        provider = provider or self._binding.identity_provider
        self._unsubscribe = provider.subscribe(self.on_principal_changed)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def start(self) -> AccessSnapshot:
        """Resolve whoever the provider reports as currently signed in."""
        try:
            principal = await self._binding.identity_provider.get_current_principal()
        except Exception as e:
            logger.error(f"Failed to read current principal: {e}")
            principal = None
        return await self.on_principal_changed(principal)

    async def on_principal_changed(self, principal: Optional[Principal]) -> AccessSnapshot:
        """Discard the current binding and resolve the new principal.

        Returns the snapshot that is current when this call finishes, which
        is a newer one if another change arrived meanwhile.
        """
        self._generation += 1
        generation = self._generation
        self._principal = principal

        if principal is None:
            self._publish(AccessSnapshot.empty(generation))
            return self._snapshot

        self._publish(AccessSnapshot.empty(generation, principal, resolving=True))

        try:
            user = await self._binding.resolve(principal)
            directory = await self._binding.fetch_directory(user)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Identity resolution failed for principal {principal.id}, denying all access: {e}")
            user, directory = None, None

        if generation != self._generation:
            logger.debug(f"Discarding stale resolution {generation} for principal {principal.id}")
            return self._snapshot

        self._publish(AccessSnapshot(generation=generation, principal=principal, user=user, directory=directory))
        logger.info(
            f"Resolved principal {principal.id}: role={principal.role}, "
            f"permissions={len(self._snapshot.permissions.effective)}"
        )
        return self._snapshot

    async def refresh(self) -> AccessSnapshot:
        """Re-resolve the current principal, e.g. after a role edit."""
        return await self.on_principal_changed(self._principal)

    async def sign_out(self) -> AccessSnapshot:
        return await self.on_principal_changed(None)

    def depends_on_role(self, role_id: str) -> bool:
        """Whether a change to the role could alter this session's decisions."""
        principal = self._principal
        if principal is None:
            return False
        snapshot = self._snapshot
        if snapshot.resolving or principal.role == role_id:
            return True
        # Requested ids include roles that were unknown when the session resolved
        return snapshot.user is not None and role_id in snapshot.user.requested_role_ids

    # Listeners

    def add_listener(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a callback invoked with every published snapshot."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _publish(self, snapshot: AccessSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Snapshot listener {listener!r} failed")

    # Decision API

    def has_permission(self, permission: PermissionLike) -> bool:
        snapshot = self._snapshot
        allowed = snapshot.permissions.has_permission(permission)
        if not allowed:
            self._audit_permission_denial(snapshot, permission)
        return allowed

    def has_any_permission(self, permissions: Iterable[PermissionLike]) -> bool:
        return self._snapshot.permissions.has_any_permission(permissions)

    def has_all_permissions(self, permissions: Iterable[PermissionLike]) -> bool:
        return self._snapshot.permissions.has_all_permissions(permissions)

    def can_access_resource(self, resource: str, action: str) -> bool:
        snapshot = self._snapshot
        allowed = snapshot.permissions.can_access_resource(resource, action)
        if not allowed:
            self._audit_permission_denial(snapshot, f"{resource}.{action}")
        return allowed

    def can_access_branch(self, branch_id: str) -> bool:
        snapshot = self._snapshot
        allowed = snapshot.branches.can_access_branch(branch_id)
        if not allowed and self._settings.audit_branch_denials and isinstance(branch_id, str) and branch_id:
            user = snapshot.user if not snapshot.resolving else None
            if user is not None and self._audit_log is not None:
                self._audit_log.record_nowait(AuditLog.branch_denied(user.id, branch_id))
        return allowed

    def get_accessible_branches(self) -> List[str]:
        return self._snapshot.branches.get_accessible_branches()

    def get_current_branch_id(self) -> Optional[str]:
        return self._snapshot.branches.get_current_branch_id()

    def get_user_permissions(self) -> FrozenSet[str]:
        return self._snapshot.permissions.get_user_permissions()

    def _audit_permission_denial(self, snapshot: AccessSnapshot, permission: object) -> None:
        if self._audit_log is None or not self._audited_permissions:
            return
        user = snapshot.user if not snapshot.resolving else None
        if user is None:
            return
        try:
            value = permission_value(permission)
            audited = value in self._audited_permissions
        except TypeError:
            return
        if audited:
            self._audit_log.record_nowait(
                AuditLog.access_denied(user.id, value, {"role": user.role, "team_role": user.team_role})
            )

    def __repr__(self) -> str:
        principal_id = self._principal.id if self._principal else None
        return (
            f"AuthorizationContext(principal={principal_id!r}, generation={self._generation}, "
            f"resolving={self._snapshot.resolving})"
        )

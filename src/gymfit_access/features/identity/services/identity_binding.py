"""Identity binding service.

Projects an authenticated principal into a UserWithRoles snapshot by
joining the identity provider's role assignment against the role
registry. A read-through projection: nothing is ever written back.
"""

import asyncio
import logging
from typing import List, Optional

from ....config.constants import ALL_BRANCHES, Scope
from ....config.settings import AccessSettings, get_settings
from ....core.exceptions import DirectoryUnavailableError, IdentityResolutionError
from ...audit.services.audit_log_service import AuditLog
from ...branches.entities.branch import BranchDirectorySnapshot
from ...branches.entities.protocols import BranchDirectory
from ...permissions.entities.protocols import RoleRegistryReader
from ...permissions.entities.role import RoleDefinition
from ..entities.principal import Principal, RoleAssignment
from ..entities.protocols import IdentityProvider
from ..entities.user_with_roles import UserWithRoles

logger = logging.getLogger(__name__)


class IdentityBinding:
    """Resolves principals into immutable UserWithRoles snapshots."""

    def __init__(
        self,
        identity_provider: IdentityProvider,
        role_registry: RoleRegistryReader,
        branch_directory: Optional[BranchDirectory] = None,
        audit_log: Optional[AuditLog] = None,
        settings: Optional[AccessSettings] = None,
    ):
        self.identity_provider = identity_provider
        self.role_registry = role_registry
        self.branch_directory = branch_directory
        self.audit_log = audit_log
        self.settings = settings or get_settings()

    async def resolve(self, principal: Optional[Principal]) -> Optional[UserWithRoles]:
        """Resolve a principal, None when it has no recognized binding.

        Callers treat None as no permissions and no branch access.

        Raises:
            IdentityResolutionError: If the identity provider fails
        """
        if principal is None:
            return None

        try:
            assignment = await self.identity_provider.get_assignment(principal.id)
        except IdentityResolutionError:
            raise
        except Exception as e:
            raise IdentityResolutionError(
                f"Failed to load role assignment for principal {principal.id}: {e}",
                details={"principal_id": principal.id},
            ) from e

        if assignment is None:
            logger.warning(f"Principal {principal.id} has no role binding, resolving without access")
            return None

        roles = self._resolve_roles(principal, assignment)
        primary_known = any(role.id == principal.role for role in roles)

        if not primary_known:
            # Unknown primary role: empty effective set, no branch access
            return self._build(principal, assignment, roles=(), custom=frozenset(), branches=frozenset())

        catalog = self.role_registry.catalog
        custom = catalog.filter_known(assignment.custom_permissions)
        dropped = assignment.custom_permissions - custom
        if dropped:
            logger.warning(
                f"Ignoring custom grants outside the catalog for principal {principal.id}: {sorted(dropped)}"
            )

        branches = self._resolve_branches(principal, assignment, roles)
        return self._build(principal, assignment, roles=tuple(roles), custom=custom, branches=branches)

    async def fetch_directory(self, user: Optional[UserWithRoles]) -> BranchDirectorySnapshot:
        """Fetch the branch listing for the user's organization.

        Never raises: a failing directory yields an unavailable snapshot,
        which denies every non-global branch decision.
        """
        if user is None or not user.organization_id or self.branch_directory is None:
            return BranchDirectorySnapshot.empty(user.organization_id if user else None)

        organization_id = user.organization_id
        try:
            branches = await asyncio.wait_for(
                self.branch_directory.list_branches(organization_id),
                timeout=self.settings.directory_timeout_seconds,
            )
        except asyncio.CancelledError:
            raise
        except (DirectoryUnavailableError, asyncio.TimeoutError) as e:
            logger.warning(f"Branch directory unavailable for organization {organization_id}: {e!r}")
            return BranchDirectorySnapshot.unavailable(organization_id)
        except Exception as e:
            logger.error(f"Branch directory lookup failed for organization {organization_id}: {e!r}")
            return BranchDirectorySnapshot.unavailable(organization_id)

        snapshot = BranchDirectorySnapshot.of(organization_id, branches)
        logger.debug(f"Directory snapshot for {organization_id}: {list(snapshot.branch_ids())}")
        return snapshot

    def _resolve_roles(self, principal: Principal, assignment: RoleAssignment) -> List[RoleDefinition]:
        role_ids = [principal.role]
        role_ids.extend(r for r in assignment.roles if r not in role_ids)

        roles = []
        for role_id in role_ids:
            role = self.role_registry.get_role(role_id)
            if role is None:
                primary = role_id == principal.role
                logger.warning(
                    f"Principal {principal.id} references unknown role {role_id!r} (primary={primary})"
                )
                if self.audit_log is not None:
                    self.audit_log.record_nowait(AuditLog.unknown_role(principal.id, role_id, primary))
                continue
            roles.append(role)
        return roles

    def _resolve_branches(self, principal: Principal, assignment: RoleAssignment, roles: List[RoleDefinition]):
        primary = next(role for role in roles if role.id == principal.role)
        if primary.scope is Scope.GLOBAL:
            return frozenset({ALL_BRANCHES})
        if assignment.assigned_branches is not None:
            return assignment.assigned_branches
        if principal.branch_id:
            return frozenset({principal.branch_id})
        return frozenset()

    def _build(self, principal: Principal, assignment: RoleAssignment, roles, custom, branches) -> UserWithRoles:
        return UserWithRoles(
            id=principal.id,
            email=principal.email,
            display_name=principal.display_name,
            role=principal.role,
            team_role=principal.team_role,
            organization_id=principal.organization_id,
            roles=roles,
            custom_permissions=custom,
            denied_permissions=assignment.denied_permissions,
            branch_id=principal.branch_id,
            assigned_branches=branches,
            is_active=assignment.is_active,
            requested_role_ids=(principal.role, *assignment.roles),
            catalog=self.role_registry.catalog,
        )

"""Built-in role definitions of the reference deployment.

Consumed only by the role registry factory. Nothing else may read these
permission sets directly; ask the registry instead.
"""

from datetime import datetime, timezone
from typing import List

from ....config.constants import Scope, SystemRole
from ..entities.permission import PermissionCatalog
from ..entities.role import RoleDefinition

SYSTEM_ROLES_CREATED_AT = datetime(2023, 1, 1, tzinfo=timezone.utc)

# Platform-level permissions reserved to super administrators
PLATFORM_ONLY_PERMISSIONS = frozenset({
    "system.manage", "system.backup", "system.restore",
    "roles.delete", "branches.delete", "users.delete",
})

TEAM_PERMISSIONS = frozenset({
    "users.view",
    "members.view", "members.create", "members.edit", "members.export",
    "staff.view",
    "team.view",
    "classes.view", "classes.create", "classes.edit", "classes.schedule",
    "equipment.view", "equipment.edit",
    "billing.view", "billing.edit",
    "finance.view", "finance.edit",
    "lockers.view", "lockers.assign",
    "attendance.view", "attendance.create",
    "analytics.view", "reports.view",
    "branches.view",
    "notifications.view", "notifications.send",
    "sms.view",
    "leads.view", "leads.edit", "leads.assign", "leads.export",
    "referrals.view", "referrals.edit", "referrals.process",
    "feedback.view", "feedback.respond",
    "tasks.view", "tasks.create", "tasks.edit", "tasks.assign",
    "products.view",
})

MEMBER_PERMISSIONS = frozenset({
    "classes.view",
    "equipment.view",
    "billing.view",
    "feedback.create",
    "referrals.view", "referrals.create",
})


def build_system_roles(catalog: PermissionCatalog) -> List[RoleDefinition]:
    """Build the system roles, validated against the given catalog.

    The super administrator receives the whole catalog; the administrator
    receives everything except platform-level permissions.
    """
    full = catalog.codes
    common = dict(
        is_system=True,
        created_at=SYSTEM_ROLES_CREATED_AT,
        updated_at=SYSTEM_ROLES_CREATED_AT,
    )
    return [
        RoleDefinition.create(
            id=SystemRole.SUPER_ADMIN.value,
            name="Super Administrator",
            description="Full system access with all permissions",
            color="#dc2626",
            scope=Scope.GLOBAL,
            permissions=full,
            catalog=catalog,
            **common
        ),
        RoleDefinition.create(
            id=SystemRole.ADMIN.value,
            name="Administrator",
            description="Administrative access across the organization's branches",
            color="#ea580c",
            scope=Scope.ORGANIZATION,
            permissions=full - PLATFORM_ONLY_PERMISSIONS,
            catalog=catalog,
            **common
        ),
        RoleDefinition.create(
            id=SystemRole.TEAM.value,
            name="Team",
            description="Operational access for managers, staff and trainers at their branch",
            color="#2563eb",
            scope=Scope.BRANCH,
            permissions=catalog.filter_known(TEAM_PERMISSIONS),
            catalog=catalog,
            **common
        ),
        RoleDefinition.create(
            id=SystemRole.MEMBER.value,
            name="Member",
            description="Basic member self-service access",
            color="#7c3aed",
            scope=Scope.SELF,
            permissions=catalog.filter_known(MEMBER_PERMISSIONS),
            catalog=catalog,
            **common
        ),
    ]

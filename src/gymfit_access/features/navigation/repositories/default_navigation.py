"""Reference navigation of the gym management app.

Each route declares who may reach it; the same declarations drive the
sidebar and route guards.
"""

from typing import Dict, Tuple

from ....config.constants import DEFAULT_ROUTE, SystemRole, TeamRole
from ..entities.navigation import AccessRequirement, NavigationGroup, NavigationItem

SUPER_ADMIN = SystemRole.SUPER_ADMIN.value
ADMIN = SystemRole.ADMIN.value
TEAM = SystemRole.TEAM.value
MEMBER = SystemRole.MEMBER.value

STAFF_ROLES = frozenset({SUPER_ADMIN, ADMIN, TEAM})
ADMIN_ROLES = frozenset({SUPER_ADMIN, ADMIN})


def _needs(*permissions: str, roles=frozenset(), team_role=None) -> AccessRequirement:
    return AccessRequirement(allowed_roles=roles, required_permissions=permissions, team_role=team_role)


def _item(id: str, title: str, url: str, group: str, requirement=None, **kwargs) -> NavigationItem:
    return NavigationItem(
        id=id,
        title=title,
        url=url,
        group=group,
        requirement=requirement or AccessRequirement(),
        **kwargs
    )


def _member_item(id: str, title: str, url: str, group: str) -> NavigationItem:
    return _item(id, title, url, group, AccessRequirement.members_only())


def _trainer_item(id: str, title: str, url: str) -> NavigationItem:
    return _item(id, title, url, "trainer-dashboard", AccessRequirement(team_role=TeamRole.TRAINER.value))


def _staff_item(id: str, title: str, url: str) -> NavigationItem:
    return _item(id, title, url, "staff-operations", AccessRequirement(team_role=TeamRole.STAFF.value))


DEFAULT_NAVIGATION: Tuple[NavigationGroup, ...] = (
    NavigationGroup(
        id="dashboard",
        title="Dashboard",
        priority=1,
        items=(_item("dashboard-main", "Dashboard", "/dashboard", "dashboard", exact_match=True),),
    ),
    NavigationGroup(
        id="user-management",
        title="User Management",
        priority=2,
        requirement=_needs("users.view", roles=ADMIN_ROLES),
        items=(
            _item("users-list", "Users", "/users", "user-management", _needs("users.view")),
            _item("users-create", "Add User", "/users/create", "user-management", _needs("users.create")),
            _item("roles", "Roles", "/roles", "user-management", _needs("roles.view", roles=ADMIN_ROLES)),
            _item("roles-create", "Add Role", "/roles/create", "user-management",
                  _needs("roles.create", roles=ADMIN_ROLES)),
            _item("team", "Team", "/team", "user-management", _needs("team.view")),
        ),
    ),
    NavigationGroup(
        id="branch-management",
        title="Branch Management",
        priority=3,
        requirement=_needs("branches.view", roles=frozenset({ADMIN, TeamRole.MANAGER.value})),
        items=(
            _item("branches", "Branches", "/branches", "branch-management", _needs("branches.view")),
            _item("branches-create", "Add Branch", "/branches/create", "branch-management",
                  _needs("branches.create")),
        ),
    ),
    NavigationGroup(
        id="members",
        title="Member Management",
        priority=4,
        requirement=_needs("members.view", roles=STAFF_ROLES),
        items=(
            _item("members-list", "Members", "/members", "members", _needs("members.view")),
            _item("members-create", "Add Member", "/members/create", "members", _needs("members.create")),
            _item("leads", "Leads", "/leads", "members", _needs("leads.view")),
        ),
    ),
    NavigationGroup(
        id="classes",
        title="Classes",
        priority=6,
        requirement=AccessRequirement(allowed_roles=STAFF_ROLES),
        items=(
            _item("classes-list", "Classes", "/classes", "classes", _needs("classes.view")),
            _item("classes-create", "Add Class", "/classes/create", "classes",
                  _needs("classes.create", roles=STAFF_ROLES, team_role=TeamRole.TRAINER.value)),
            _item("trainers", "Trainers", "/trainers", "classes", _needs("team.view", roles=STAFF_ROLES)),
        ),
    ),
    NavigationGroup(
        id="finance",
        title="Finance",
        priority=7,
        requirement=_needs("finance.view", roles=ADMIN_ROLES),
        items=(
            _item("finance-dashboard", "Finance", "/finance", "finance", _needs("finance.view")),
            _item("transactions", "Transactions", "/finance/transactions", "finance", _needs("finance.view")),
            _item("finance-reports", "Reports", "/finance/reports", "finance", _needs("reports.view")),
        ),
    ),
    NavigationGroup(
        id="operations",
        title="Operations",
        priority=8,
        requirement=AccessRequirement(allowed_roles=STAFF_ROLES),
        items=(
            _item("attendance", "Attendance", "/attendance", "operations", _needs("attendance.view")),
            _item("attendance-devices", "Devices", "/attendance/devices", "operations",
                  _needs("devices.view", roles=ADMIN_ROLES)),
            _item("lockers", "Lockers", "/lockers", "operations", _needs("lockers.view")),
            _item("equipment", "Equipment", "/equipment", "operations", _needs("equipment.view")),
        ),
    ),
    NavigationGroup(
        id="system",
        title="System",
        priority=12,
        requirement=AccessRequirement(allowed_roles=ADMIN_ROLES),
        items=(
            _item("system-settings", "System Settings", "/system/settings", "system",
                  _needs("system.manage", roles=frozenset({SUPER_ADMIN}))),
            _item("system-health", "System Health", "/system/health", "system",
                  _needs("system.view", roles=frozenset({SUPER_ADMIN}))),
            _item("system-backup", "Backup", "/system/backup", "system",
                  _needs("system.backup", roles=frozenset({SUPER_ADMIN}))),
        ),
    ),
    NavigationGroup(
        id="member-fitness",
        title="My Fitness",
        priority=1,
        requirement=AccessRequirement(allowed_roles=frozenset({MEMBER})),
        items=(
            _member_item("member-classes", "My Classes", "/member/classes", "member-fitness"),
            _member_item("member-checkins", "Check-ins", "/member/checkins", "member-fitness"),
            _member_item("member-goals", "Goals", "/member/goals", "member-fitness"),
        ),
    ),
    NavigationGroup(
        id="member-account",
        title="My Account",
        priority=2,
        requirement=AccessRequirement(allowed_roles=frozenset({MEMBER})),
        items=(
            _member_item("member-billing", "Billing", "/member/billing", "member-account"),
            _member_item("member-feedback", "Feedback", "/member/feedback", "member-account"),
        ),
    ),
    NavigationGroup(
        id="trainer-dashboard",
        title="Trainer",
        priority=1,
        requirement=AccessRequirement(team_role=TeamRole.TRAINER.value),
        items=(
            _trainer_item("trainer-schedule", "Schedule", "/trainer/schedule"),
            _trainer_item("trainer-clients", "Clients", "/trainer/clients"),
        ),
    ),
    NavigationGroup(
        id="staff-operations",
        title="Staff",
        priority=1,
        requirement=AccessRequirement(team_role=TeamRole.STAFF.value),
        items=(
            _staff_item("staff-checkin", "Check-in", "/staff/checkin"),
            _staff_item("staff-tasks", "Tasks", "/staff/tasks"),
        ),
    ),
)

ROLE_DEFAULT_ROUTES: Dict[str, str] = {
    SUPER_ADMIN: DEFAULT_ROUTE,
    ADMIN: DEFAULT_ROUTE,
    TEAM: DEFAULT_ROUTE,
    MEMBER: DEFAULT_ROUTE,
}

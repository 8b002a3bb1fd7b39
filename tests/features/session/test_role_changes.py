"""Tests for live sessions reacting to role administration."""

import pytest

from gymfit_access.config.constants import Scope
from gymfit_access.features.identity.entities.principal import Principal, RoleAssignment
from gymfit_access.features.permissions.services.role_administration import RoleAdministrationService


@pytest.fixture
def admin(registry, audit_log, context):
    service = RoleAdministrationService(registry, audit_log=audit_log)
    service.register_session(context)
    return service


@pytest.fixture
def desk_principal(identity_provider):
    """Principal whose primary role is the custom front-desk role."""
    principal = Principal(
        id="u-desk", email="desk2@gym.example", role="front-desk",
        branch_id="b1", organization_id="org-1",
    )
    identity_provider.add_principal(principal, RoleAssignment(user_id="u-desk"))
    return principal


async def _staff_with_extra_role(identity_provider, role_id):
    await identity_provider.set_assignment(
        RoleAssignment(user_id="u-staff", roles=(role_id,), assigned_branches=frozenset({"b1"}))
    )
    await identity_provider.sign_in("u-staff")


class TestPrimaryRoleChanges:
    """Test sessions whose primary role is edited."""

    @pytest.mark.asyncio
    async def test_update_revokes_permission(self, admin, context, identity_provider, desk_principal):
        await admin.create_role("front-desk", "Front Desk", Scope.BRANCH, ["members.view", "lockers.view"])
        await identity_provider.sign_in("u-desk")
        assert context.has_permission("lockers.view")

        await admin.update_role("front-desk", permissions=["members.view"])

        assert not context.has_permission("lockers.view")
        assert context.has_permission("members.view")

    @pytest.mark.asyncio
    async def test_delete_removes_all_access(self, admin, context, identity_provider, desk_principal):
        await admin.create_role("front-desk", "Front Desk", Scope.BRANCH, ["members.view"])
        await identity_provider.sign_in("u-desk")
        assert context.can_access_branch("b1")

        await admin.delete_role("front-desk")

        assert context.get_user_permissions() == frozenset()
        assert not context.can_access_branch("b1")

    @pytest.mark.asyncio
    async def test_create_heals_session_with_missing_role(
        self, admin, context, identity_provider, desk_principal
    ):
        await identity_provider.sign_in("u-desk")
        assert context.get_user_permissions() == frozenset()

        await admin.create_role("front-desk", "Front Desk", Scope.BRANCH, ["members.view"])

        assert context.get_user_permissions() == frozenset({"members.view"})
        assert context.can_access_branch("b1")


class TestExtraRoleChanges:
    """Test sessions holding a custom role besides their primary role."""

    @pytest.mark.asyncio
    async def test_create_of_role_unknown_at_sign_in(self, admin, context, identity_provider):
        await _staff_with_extra_role(identity_provider, "front-desk")
        assert not context.has_permission("products.create")
        assert context.depends_on_role("front-desk")

        await admin.create_role("front-desk", "Front Desk", Scope.BRANCH, ["products.create"])

        assert context.has_permission("products.create")
        assert context.has_permission("members.view")

    @pytest.mark.asyncio
    async def test_update_grants_permission(self, admin, context, identity_provider):
        await admin.create_role("front-desk", "Front Desk", Scope.BRANCH, ["members.view"])
        await _staff_with_extra_role(identity_provider, "front-desk")
        assert not context.has_permission("products.create")

        await admin.update_role("front-desk", permissions=["members.view", "products.create"])

        assert context.has_permission("products.create")

    @pytest.mark.asyncio
    async def test_delete_revokes_role_permissions(self, admin, context, identity_provider):
        await admin.create_role("front-desk", "Front Desk", Scope.BRANCH, ["products.create"])
        await _staff_with_extra_role(identity_provider, "front-desk")
        assert context.has_permission("products.create")

        await admin.delete_role("front-desk")

        assert not context.has_permission("products.create")
        assert context.has_permission("members.view")


class TestUnaffectedSessions:
    """Test that sessions not holding the role keep their snapshot."""

    @pytest.mark.asyncio
    async def test_other_session_is_not_rebound(self, admin, context, identity_provider):
        await identity_provider.sign_in("u-member")
        before = context.snapshot

        await admin.create_role("front-desk", "Front Desk", Scope.BRANCH, ["members.view"])

        assert not context.depends_on_role("front-desk")
        assert context.snapshot is before

    @pytest.mark.asyncio
    async def test_signed_out_session_is_not_rebound(self, admin, context):
        before = context.snapshot

        await admin.create_role("front-desk", "Front Desk", Scope.BRANCH)

        assert context.snapshot is before

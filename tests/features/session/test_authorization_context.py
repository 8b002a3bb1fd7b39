"""Tests for the session authorization context."""

import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from gymfit_access.config.constants import AuditAction
from gymfit_access.config.settings import AccessSettings
from gymfit_access.core.exceptions import AuditLogUnavailableError
from gymfit_access.features.audit.services.audit_log_service import AuditLog
from gymfit_access.features.branches.entities.branch import Branch
from gymfit_access.features.identity.entities.principal import Principal, RoleAssignment
from gymfit_access.features.identity.services.identity_binding import IdentityBinding
from gymfit_access.features.session.entities.access_snapshot import AccessSnapshot
from gymfit_access.features.session.services.authorization_context import AuthorizationContext


def _assert_fail_closed(ctx):
    assert not ctx.has_permission("members.view")
    assert not ctx.has_any_permission(["members.view", "classes.view"])
    assert not ctx.has_all_permissions(["members.view"])
    assert not ctx.can_access_resource("members", "view")
    assert not ctx.can_access_branch("b1")
    assert ctx.get_accessible_branches() == []
    assert ctx.get_current_branch_id() is None
    assert ctx.get_user_permissions() == frozenset()


class GatedDirectory:
    """Branch directory whose listing blocks until released per organization."""

    def __init__(self, branches):
        self._branches = branches
        self.gates = {}

    def _gate(self, organization_id):
        return self.gates.setdefault(organization_id, asyncio.Event())

    def release(self, organization_id):
        self._gate(organization_id).set()

    async def list_branches(self, organization_id):
        await self._gate(organization_id).wait()
        return [b for b in self._branches if b.organization_id == organization_id]


class TestAccessSnapshot:
    """Test snapshot construction."""

    def test_resolving_snapshot_carries_no_decisions(self, make_user, directory_snapshot):
        snapshot = AccessSnapshot(
            generation=1, user=make_user("admin"), directory=directory_snapshot, resolving=True
        )

        assert not snapshot.is_resolved
        assert snapshot.permissions.get_user_permissions() == frozenset()
        assert not snapshot.branches.can_access_branch("b1")

    def test_resolved_snapshot(self, make_user, directory_snapshot):
        snapshot = AccessSnapshot(generation=1, user=make_user("admin"), directory=directory_snapshot)

        assert snapshot.is_resolved
        assert snapshot.permissions.has_permission("members.edit")
        assert snapshot.branches.get_accessible_branches() == ["b1", "b2"]


class TestDecisionApi:
    """Test the decision API across sign-in states."""

    @pytest.mark.asyncio
    async def test_signed_out_fails_closed(self, context):
        assert context.current_user is None
        _assert_fail_closed(context)

    @pytest.mark.asyncio
    async def test_admin_session(self, context, identity_provider):
        await identity_provider.sign_in("u-admin")

        assert context.current_user.id == "u-admin"
        assert not context.is_resolving
        assert context.has_permission("members.edit")
        assert not context.has_permission("system.manage")
        assert context.can_access_branch("b2")
        assert not context.can_access_branch("x1")
        assert context.get_accessible_branches() == ["b1", "b2"]
        assert context.get_current_branch_id() == "b1"

    @pytest.mark.asyncio
    async def test_super_admin_session(self, context, identity_provider):
        await identity_provider.sign_in("u-root")

        assert context.get_accessible_branches() == ["all"]
        assert context.can_access_branch("any-branch-not-in-directory")
        assert context.has_permission("system.manage")

    @pytest.mark.asyncio
    async def test_staff_session(self, context, identity_provider):
        await identity_provider.sign_in("u-staff")

        assert context.can_access_branch("b1")
        assert not context.can_access_branch("b2")
        assert context.get_current_branch_id() == "b1"

    @pytest.mark.asyncio
    async def test_sign_out_discards_binding(self, context, identity_provider):
        await identity_provider.sign_in("u-admin")
        await identity_provider.sign_out()

        assert context.principal is None
        _assert_fail_closed(context)

    @pytest.mark.asyncio
    async def test_sign_out_via_context(self, context, identity_provider):
        await identity_provider.sign_in("u-admin")
        await context.sign_out()
        _assert_fail_closed(context)

    @pytest.mark.asyncio
    async def test_assignment_change_rebinds(self, context, identity_provider):
        await identity_provider.sign_in("u-staff")
        assert context.has_permission("members.view")

        await identity_provider.set_assignment(
            RoleAssignment(user_id="u-staff", assigned_branches={"b1"}, denied_permissions={"members.view"})
        )

        assert not context.has_permission("members.view")

    @pytest.mark.asyncio
    async def test_principal_without_binding(self, context, identity_provider):
        identity_provider.add_principal(Principal(id="u-new", email="n@x.example", role="member"))

        await identity_provider.sign_in("u-new")

        assert context.principal.id == "u-new"
        assert context.current_user is None
        _assert_fail_closed(context)

    @pytest.mark.asyncio
    async def test_inactive_account(self, context, identity_provider):
        await identity_provider.set_assignment(RoleAssignment(user_id="u-admin", is_active=False))
        await identity_provider.sign_in("u-admin")

        _assert_fail_closed(context)

    @pytest.mark.asyncio
    async def test_malformed_queries_never_raise(self, context, identity_provider):
        await identity_provider.sign_in("u-admin")

        assert not context.has_permission(None)
        assert not context.has_any_permission(None)
        assert not context.can_access_resource(None, None)
        assert not context.can_access_branch(None)

    @pytest.mark.asyncio
    async def test_start_resolves_current_principal(self, binding, identity_provider):
        await identity_provider.sign_in("u-member")
        ctx = AuthorizationContext(binding, settings=AccessSettings())

        await ctx.start()

        assert ctx.current_user.id == "u-member"
        assert ctx.has_permission("classes.view")


class TestResolutionOrdering:
    """Test that only the latest resolution is committed."""

    @pytest.fixture
    def gated_directory(self, sample_branches):
        return GatedDirectory(sample_branches + [Branch(id="y1", name="Lakeside", organization_id="org-9")])

    @pytest.fixture
    def gated_context(self, identity_provider, registry, gated_directory):
        binding = IdentityBinding(
            identity_provider, registry, branch_directory=gated_directory, settings=AccessSettings()
        )
        return AuthorizationContext(binding, settings=AccessSettings())

    @pytest.mark.asyncio
    async def test_decisions_fail_closed_while_resolving(
        self, gated_context, gated_directory, sample_principals
    ):
        task = asyncio.create_task(gated_context.on_principal_changed(sample_principals["admin"]))
        await asyncio.sleep(0)

        assert gated_context.is_resolving
        _assert_fail_closed(gated_context)

        gated_directory.release("org-1")
        await task

        assert not gated_context.is_resolving
        assert gated_context.has_permission("members.edit")

    @pytest.mark.asyncio
    async def test_stale_resolution_is_discarded(
        self, gated_context, gated_directory, identity_provider, sample_principals
    ):
        other_org_admin = Principal(id="u-admin-9", email="o9@gym.example", role="admin", organization_id="org-9")
        identity_provider.add_principal(other_org_admin, RoleAssignment(user_id="u-admin-9"))

        first = asyncio.create_task(gated_context.on_principal_changed(sample_principals["admin"]))
        await asyncio.sleep(0)
        second = asyncio.create_task(gated_context.on_principal_changed(other_org_admin))
        await asyncio.sleep(0)

        gated_directory.release("org-9")
        await second
        assert gated_context.current_user.id == "u-admin-9"

        gated_directory.release("org-1")
        stale_result = await first

        assert stale_result.user.id == "u-admin-9"
        assert gated_context.current_user.id == "u-admin-9"
        assert gated_context.get_accessible_branches() == ["y1"]
        assert not gated_context.can_access_branch("b1")

    @pytest.mark.asyncio
    async def test_sign_out_during_resolution_wins(self, gated_context, gated_directory, sample_principals):
        pending = asyncio.create_task(gated_context.on_principal_changed(sample_principals["admin"]))
        await asyncio.sleep(0)

        await gated_context.sign_out()
        gated_directory.release("org-1")
        result = await pending

        assert result.user is None
        assert gated_context.principal is None
        _assert_fail_closed(gated_context)

    @pytest.mark.asyncio
    async def test_listeners_see_every_published_snapshot(self, context, identity_provider):
        published = []
        remove = context.add_listener(published.append)

        await identity_provider.sign_in("u-admin")
        await identity_provider.sign_out()
        remove()
        await identity_provider.sign_in("u-member")

        assert [(s.resolving, s.user is not None) for s in published] == [
            (True, False),
            (False, True),
            (False, False),
        ]
        generations = [s.generation for s in published]
        assert generations == sorted(generations)

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_break_publication(self, context, identity_provider):
        context.add_listener(MagicMock(side_effect=RuntimeError("ui crashed")))

        await identity_provider.sign_in("u-admin")

        assert context.has_permission("members.edit")

    @pytest.mark.asyncio
    async def test_binding_failure_fails_closed(self, registry, sample_principals):
        provider = MagicMock()
        provider.get_assignment = AsyncMock(side_effect=ConnectionError("idp down"))
        ctx = AuthorizationContext(IdentityBinding(provider, registry), settings=AccessSettings())

        snapshot = await ctx.on_principal_changed(sample_principals["admin"])

        assert snapshot.user is None
        assert not snapshot.resolving
        _assert_fail_closed(ctx)


class TestDenialAuditing:
    """Test auditing of denied decisions."""

    @pytest.mark.asyncio
    async def test_audited_permission_denial_is_recorded(self, context, identity_provider, audit_log):
        await identity_provider.sign_in("u-member")

        assert not context.has_permission("system.manage")
        assert not context.can_access_resource("finance", "view")
        assert not context.has_permission("members.delete")
        await audit_log.flush()

        entries = await audit_log.list_entries()
        assert [(e.action, e.resource_id) for e in entries] == [
            (AuditAction.ACCESS_DENIED.value, "system.manage"),
            (AuditAction.ACCESS_DENIED.value, "finance.view"),
        ]
        assert entries[0].actor_id == "u-member"
        assert entries[0].metadata["role"] == "member"

    @pytest.mark.asyncio
    async def test_branch_denial_is_recorded(self, context, identity_provider, audit_log):
        await identity_provider.sign_in("u-staff")

        assert not context.can_access_branch("b2")
        await audit_log.flush()

        entries = await audit_log.list_entries()
        assert [(e.action, e.resource_id) for e in entries] == [(AuditAction.BRANCH_DENIED.value, "b2")]

    @pytest.mark.asyncio
    async def test_signed_out_denials_are_not_recorded(self, context, audit_log):
        assert not context.has_permission("system.manage")
        await audit_log.flush()
        assert await audit_log.list_entries() == []

    @pytest.mark.asyncio
    async def test_audit_outage_does_not_change_decisions(
        self, binding, identity_provider, mock_audit_store, settings
    ):
        mock_audit_store.append.side_effect = AuditLogUnavailableError("down")
        on_error = MagicMock()
        failing_log = AuditLog(mock_audit_store, on_error=on_error)
        ctx = AuthorizationContext(binding, audit_log=failing_log, settings=settings)
        ctx.attach()
        await identity_provider.sign_in("u-member")

        assert not ctx.has_permission("system.manage")
        assert ctx.has_permission("classes.view")
        await failing_log.flush()
        on_error.assert_called_once()
        ctx.detach()

"""Pytest configuration and fixtures for gymfit-access tests."""

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from gymfit_access.config.constants import BranchStatus, SystemRole, TeamRole
from gymfit_access.config.settings import AccessSettings
from gymfit_access.features.audit.repositories.memory_audit_store import InMemoryAuditStore
from gymfit_access.features.audit.services.audit_log_service import AuditLog
from gymfit_access.features.branches.entities.branch import Branch, BranchDirectorySnapshot
from gymfit_access.features.branches.repositories.memory_branch_directory import InMemoryBranchDirectory
from gymfit_access.features.identity.entities.principal import Principal, RoleAssignment
from gymfit_access.features.identity.entities.user_with_roles import UserWithRoles
from gymfit_access.features.identity.repositories.memory_identity_provider import InMemoryIdentityProvider
from gymfit_access.features.identity.services.identity_binding import IdentityBinding
from gymfit_access.features.permissions.entities.permission import DEFAULT_PERMISSION_CATALOG
from gymfit_access.features.permissions.repositories.role_registry import InMemoryRoleRegistry
from gymfit_access.features.session.services.authorization_context import AuthorizationContext


ORG_ID = "org-1"
OTHER_ORG_ID = "org-2"


@pytest.fixture
def catalog():
    """Reference permission catalog."""
    return DEFAULT_PERMISSION_CATALOG


@pytest.fixture
def registry(catalog):
    """Role registry seeded with the system roles only."""
    return InMemoryRoleRegistry(catalog=catalog)


@pytest.fixture
def sample_branches():
    """Branches of two organizations, one of them under maintenance."""
    return [
        Branch(id="b1", name="Downtown", organization_id=ORG_ID),
        Branch(id="b2", name="Eastside", organization_id=ORG_ID),
        Branch(id="b3", name="Airport", organization_id=ORG_ID, status=BranchStatus.MAINTENANCE),
        Branch(id="x1", name="Harbor", organization_id=OTHER_ORG_ID),
    ]


@pytest.fixture
def branch_directory(sample_branches):
    return InMemoryBranchDirectory(sample_branches)


@pytest.fixture
def directory_snapshot(sample_branches):
    """Directory listing of the first organization: b1, b2."""
    return BranchDirectorySnapshot.of(ORG_ID, [b for b in sample_branches if b.id in ("b1", "b2")])


@pytest.fixture
def sample_principals():
    """One principal per reference role."""
    return {
        "root": Principal(id="u-root", email="root@gymfit.io", role=SystemRole.SUPER_ADMIN.value),
        "admin": Principal(
            id="u-admin", email="owner@gym.example", role=SystemRole.ADMIN.value, organization_id=ORG_ID
        ),
        "trainer": Principal(
            id="u-trainer",
            email="coach@gym.example",
            role=SystemRole.TEAM.value,
            team_role=TeamRole.TRAINER.value,
            branch_id="b1",
            organization_id=ORG_ID,
        ),
        "staff": Principal(
            id="u-staff",
            email="desk@gym.example",
            role=SystemRole.TEAM.value,
            team_role=TeamRole.STAFF.value,
            branch_id="b1",
            organization_id=ORG_ID,
        ),
        "member": Principal(
            id="u-member", email="jo@mail.example", role=SystemRole.MEMBER.value,
            branch_id="b1", organization_id=ORG_ID,
        ),
    }


@pytest.fixture
def sample_assignments():
    return [
        RoleAssignment(user_id="u-root"),
        RoleAssignment(user_id="u-admin"),
        RoleAssignment(user_id="u-trainer", assigned_branches=frozenset({"b1"})),
        RoleAssignment(user_id="u-staff", assigned_branches=frozenset({"b1"})),
        RoleAssignment(user_id="u-member"),
    ]


@pytest.fixture
def identity_provider(sample_principals, sample_assignments):
    return InMemoryIdentityProvider(sample_principals.values(), sample_assignments)


@pytest.fixture
def audit_store():
    return InMemoryAuditStore(max_entries=100)


@pytest.fixture
def audit_log(audit_store):
    return AuditLog(audit_store)


@pytest.fixture
def settings():
    """Settings with denial auditing for a few sensitive permissions."""
    return AccessSettings(
        audited_permissions=["system.manage", "finance.view"],
        audit_branch_denials=True,
        directory_timeout_seconds=0.5,
    )


@pytest.fixture
def binding(identity_provider, registry, branch_directory, audit_log, settings):
    return IdentityBinding(
        identity_provider=identity_provider,
        role_registry=registry,
        branch_directory=branch_directory,
        audit_log=audit_log,
        settings=settings,
    )


@pytest_asyncio.fixture
async def context(binding, audit_log, settings):
    """Authorization context attached to the in-memory identity provider."""
    ctx = AuthorizationContext(binding, audit_log=audit_log, settings=settings)
    ctx.attach()
    yield ctx
    ctx.detach()
    await audit_log.flush()


@pytest.fixture
def make_user(registry):
    """Factory for resolved users built straight from registry roles."""

    def _make_user(role_id, extra_roles=(), **kwargs):
        roles = [registry.get_role(r) for r in (role_id, *extra_roles)]
        kwargs.setdefault("id", f"u-{role_id}")
        kwargs.setdefault("email", f"{role_id}@gym.example")
        kwargs.setdefault("organization_id", ORG_ID)
        return UserWithRoles(role=role_id, roles=tuple(r for r in roles if r is not None), **kwargs)

    return _make_user


@pytest.fixture
def mock_audit_store():
    """Mock audit store for failure scenarios."""
    store = MagicMock()
    store.append = AsyncMock()
    store.list_entries = AsyncMock(return_value=[])
    return store


@pytest.fixture
def mock_redis_client():
    """Mock async redis client with a pipeline double."""
    client = MagicMock()
    pipeline = MagicMock()
    pipeline.execute = AsyncMock(return_value=[1, True])
    client.pipeline.return_value = pipeline
    client.lrange = AsyncMock(return_value=[])
    client.aclose = AsyncMock()
    return client

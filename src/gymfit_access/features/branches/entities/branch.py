"""Branch entity and directory snapshot.

Branches are owned by the branch directory; the core only reads their
ids and organization membership.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from ....config.constants import BranchStatus


@dataclass(frozen=True)
class Branch:
    """Organizational sub-unit (physical location)."""

    id: str
    name: str
    organization_id: str
    status: BranchStatus = BranchStatus.ACTIVE

    def __post_init__(self):
        if not self.id:
            raise ValueError("Branch id cannot be empty")
        object.__setattr__(self, "status", BranchStatus(self.status))

    @property
    def is_active(self) -> bool:
        return self.status is BranchStatus.ACTIVE


@dataclass(frozen=True)
class BranchDirectorySnapshot:
    """Branch listing for one organization, captured at resolution time.

    ``available`` is False when the directory lookup failed; decisions that
    depend on directory contents then deny.
    """

    organization_id: Optional[str]
    branches: Tuple[Branch, ...] = ()
    available: bool = True
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        object.__setattr__(self, "branches", tuple(self.branches))

    @classmethod
    def of(cls, organization_id: Optional[str], branches: Iterable[Branch]) -> "BranchDirectorySnapshot":
        """Snapshot of the active branches belonging to the organization."""
        kept = tuple(
            b for b in branches
            if b.is_active and (organization_id is None or b.organization_id == organization_id)
        )
        return cls(organization_id=organization_id, branches=kept)

    @classmethod
    def empty(cls, organization_id: Optional[str] = None) -> "BranchDirectorySnapshot":
        return cls(organization_id=organization_id)

    @classmethod
    def unavailable(cls, organization_id: Optional[str]) -> "BranchDirectorySnapshot":
        return cls(organization_id=organization_id, available=False)

    def branch_ids(self) -> Tuple[str, ...]:
        """Branch ids in directory order."""
        return tuple(b.id for b in self.branches)

    def contains(self, branch_id: str) -> bool:
        return self.available and any(b.id == branch_id for b in self.branches)

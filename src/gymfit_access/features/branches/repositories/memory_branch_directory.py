"""In-memory branch directory."""

import logging
from typing import Dict, Iterable, List

from ....config.constants import BranchStatus
from ..entities.branch import Branch

logger = logging.getLogger(__name__)


class InMemoryBranchDirectory:
    """BranchDirectory implementation over a fixed list of branches.

    Mirrors the remote listing: active branches only, ordered by name.
    """

    def __init__(self, branches: Iterable[Branch] = ()):
        self._branches: Dict[str, Branch] = {b.id: b for b in branches}

    async def list_branches(self, organization_id: str) -> List[Branch]:
        branches = [
            b for b in self._branches.values()
            if b.organization_id == organization_id and b.status is BranchStatus.ACTIVE
        ]
        branches.sort(key=lambda b: (b.name.lower(), b.id))
        logger.debug(f"Listed {len(branches)} active branches for organization {organization_id}")
        return branches

    def add_branch(self, branch: Branch) -> None:
        self._branches[branch.id] = branch

    def set_status(self, branch_id: str, status: BranchStatus) -> None:
        branch = self._branches[branch_id]
        self._branches[branch_id] = Branch(
            id=branch.id,
            name=branch.name,
            organization_id=branch.organization_id,
            status=status,
        )

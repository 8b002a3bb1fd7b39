"""Protocol interfaces for the branch directory collaborator."""

from abc import abstractmethod
from typing import List, Protocol, runtime_checkable

from .branch import Branch


@runtime_checkable
class BranchDirectory(Protocol):
    """Protocol for listing the branches of an organization."""

    @abstractmethod
    async def list_branches(self, organization_id: str) -> List[Branch]:
        """List the organization's active branches.

        Raises:
            DirectoryUnavailableError: If the directory cannot be reached
        """
        ...

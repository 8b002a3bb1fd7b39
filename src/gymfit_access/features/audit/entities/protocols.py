"""Protocol interfaces for audit log storage."""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from .audit_entry import AuditEntry


@runtime_checkable
class AuditStore(Protocol):
    """Protocol for append-only audit entry storage."""

    @abstractmethod
    async def append(self, entry: AuditEntry) -> None:
        """Append an entry.

        Raises:
            AuditLogUnavailableError: If the store cannot accept the entry
        """
        ...

    @abstractmethod
    async def list_entries(self, limit: Optional[int] = None) -> List[AuditEntry]:
        """Return stored entries ordered by timestamp, most recent last."""
        ...

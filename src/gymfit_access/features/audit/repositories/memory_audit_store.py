"""In-memory audit store."""

from collections import deque
from typing import Deque, List, Optional

from ....config.constants import AuditDefaults
from ..entities.audit_entry import AuditEntry


class InMemoryAuditStore:
    """Bounded in-process audit store; the oldest entries are evicted first."""

    def __init__(self, max_entries: int = AuditDefaults.MAX_ENTRIES):
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got: {max_entries}")
        self._entries: Deque[AuditEntry] = deque(maxlen=max_entries)

    async def append(self, entry: AuditEntry) -> None:
        self._entries.append(entry)

    async def list_entries(self, limit: Optional[int] = None) -> List[AuditEntry]:
        entries = sorted(self._entries, key=lambda e: e.timestamp)
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        return entries

    def __len__(self) -> int:
        return len(self._entries)

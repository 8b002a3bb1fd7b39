"""Redis-backed audit store.

Entries are kept as JSON documents in a Redis list, appended with RPUSH
and capped with LTRIM so the list holds the most recent entries.
"""

import json
import logging
from typing import List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ....config.constants import AuditDefaults
from ....core.exceptions import AuditLogUnavailableError
from ..entities.audit_entry import AuditEntry

logger = logging.getLogger(__name__)


class RedisAuditStore:
    """AuditStore implementation on a Redis list."""

    def __init__(
        self,
        client: redis.Redis,
        key: str = AuditDefaults.REDIS_KEY,
        max_entries: int = AuditDefaults.MAX_ENTRIES,
    ):
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got: {max_entries}")
        self._client = client
        self._key = key
        self._max_entries = max_entries

    @classmethod
    def from_url(
        cls,
        url: str,
        key: str = AuditDefaults.REDIS_KEY,
        max_entries: int = AuditDefaults.MAX_ENTRIES,
    ) -> "RedisAuditStore":
        client = redis.Redis.from_url(url, decode_responses=True)
        return cls(client, key=key, max_entries=max_entries)

    async def append(self, entry: AuditEntry) -> None:
        payload = json.dumps(entry.to_dict(), default=str)
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.rpush(self._key, payload)
            pipe.ltrim(self._key, -self._max_entries, -1)
            await pipe.execute()
        except RedisError as e:
            logger.error(f"Failed to append audit entry {entry.id} to {self._key}: {e}")
            raise AuditLogUnavailableError(
                f"Audit store unavailable: {e}",
                details={"entry_id": entry.id, "key": self._key},
            )

    async def list_entries(self, limit: Optional[int] = None) -> List[AuditEntry]:
        if limit is not None and limit <= 0:
            return []
        start = -limit if limit else 0
        try:
            raw_entries = await self._client.lrange(self._key, start, -1)
        except RedisError as e:
            logger.error(f"Failed to read audit entries from {self._key}: {e}")
            raise AuditLogUnavailableError(f"Audit store unavailable: {e}", details={"key": self._key})

        entries = [AuditEntry.from_dict(json.loads(raw)) for raw in raw_entries]
        entries.sort(key=lambda e: e.timestamp)
        return entries

    async def close(self) -> None:
        await self._client.aclose()

"""Audit log service.

Append-only recording of permission-relevant state transitions. The
decision path uses ``record_nowait`` so that a decision is never blocked
or altered by audit availability; administrative paths await ``record``.
"""

import asyncio
import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional, Set

from ....config.constants import AuditAction, AuditBackend, AuditDefaults
from ....config.settings import AccessSettings, get_settings
from ....core.exceptions import AuditLogUnavailableError, ConfigurationError, UnknownRoleError
from ..entities.audit_entry import AuditEntry
from ..entities.protocols import AuditStore
from ..repositories.memory_audit_store import InMemoryAuditStore
from ..repositories.redis_audit_store import RedisAuditStore

logger = logging.getLogger(__name__)

AuditErrorHandler = Callable[[AuditEntry, Exception], None]


class AuditLog:
    """Service for writing and reading audit entries.

    Failures are never dropped silently: ``record`` raises
    AuditLogUnavailableError, and fire-and-forget writes report failures
    through the logger and the optional ``on_error`` callback.
    """

    def __init__(
        self,
        store: AuditStore,
        on_error: Optional[AuditErrorHandler] = None,
        max_pending: int = AuditDefaults.MAX_ENTRIES,
    ):
        """Initialize with store dependency.

        Args:
            store: Audit store implementation
            on_error: Called with (entry, error) when a fire-and-forget write fails
            max_pending: Queued entries kept while no event loop runs; the oldest
                are dropped beyond this
        """
        self._store = store
        self._on_error = on_error
        if max_pending <= 0:
            raise ValueError("max_pending must be positive")
        self._pending: Deque[AuditEntry] = deque(maxlen=max_pending)
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        """Entries queued or in flight."""
        return len(self._pending) + len(self._tasks)

    async def record(self, entry: AuditEntry) -> AuditEntry:
        """Append an entry, raising if the store cannot accept it.

        Raises:
            AuditLogUnavailableError: If the underlying store fails
        """
        try:
            await self._store.append(entry)
        except AuditLogUnavailableError:
            raise
        except Exception as e:
            raise AuditLogUnavailableError(
                f"Failed to record audit entry {entry.id}: {e}",
                details={"entry_id": entry.id, "action": entry.action},
            ) from e

        logger.debug(f"Audit entry recorded: {entry.action} {entry.resource_type}:{entry.resource_id}")
        return entry

    def record_nowait(self, entry: AuditEntry) -> None:
        """Schedule an entry without blocking the caller. Never raises.

        Without a running event loop the entry is queued and written by the
        next ``flush``; a full queue drops its oldest entry.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if len(self._pending) == self._pending.maxlen:
                dropped = self._pending.popleft()
                self._report_failure(
                    dropped, AuditLogUnavailableError(f"Audit queue full ({self._pending.maxlen} entries)")
                )
            self._pending.append(entry)
            logger.debug(f"No running loop, queued audit entry {entry.id}")
            return

        task = loop.create_task(self._record_reported(entry))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def flush(self) -> None:
        """Write queued entries and wait for in-flight writes."""
        while self._pending:
            await self._record_reported(self._pending.popleft())
        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def list_entries(self, limit: Optional[int] = None) -> List[AuditEntry]:
        """Entries ordered by timestamp, most recent last."""
        return await self._store.list_entries(limit)

    async def _record_reported(self, entry: AuditEntry) -> None:
        try:
            await self.record(entry)
        except AuditLogUnavailableError as e:
            self._report_failure(entry, e)

    def _report_failure(self, entry: AuditEntry, error: Exception) -> None:
        logger.error(f"Audit entry {entry.id} ({entry.action}) was not recorded: {error}")
        if self._on_error is None:
            return
        try:
            self._on_error(entry, error)
        except Exception:
            logger.exception(f"Audit error handler failed for entry {entry.id}")

    # Entry builders

    @staticmethod
    def role_changed(
        actor_id: Optional[str],
        action: AuditAction,
        role_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditEntry:
        return AuditEntry(
            actor_id=actor_id,
            action=action.value,
            resource_type="role",
            resource_id=role_id,
            metadata=metadata or {},
        )

    @staticmethod
    def access_denied(
        actor_id: Optional[str],
        permission: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuditEntry:
        return AuditEntry(
            actor_id=actor_id,
            action=AuditAction.ACCESS_DENIED.value,
            resource_type="permission",
            resource_id=permission,
            metadata=metadata or {},
        )

    @staticmethod
    def branch_denied(actor_id: Optional[str], branch_id: str) -> AuditEntry:
        return AuditEntry(
            actor_id=actor_id,
            action=AuditAction.BRANCH_DENIED.value,
            resource_type="branch",
            resource_id=branch_id,
        )

    @staticmethod
    def unknown_role(actor_id: Optional[str], role_id: str, primary: bool) -> AuditEntry:
        return AuditEntry(
            actor_id=actor_id,
            action=AuditAction.ROLE_UNKNOWN.value,
            resource_type="role",
            resource_id=role_id,
            metadata={"primary": primary, "reason": UnknownRoleError.__name__},
        )


def build_audit_log(
    settings: Optional[AccessSettings] = None,
    on_error: Optional[AuditErrorHandler] = None,
) -> Optional[AuditLog]:
    """Create the audit log configured by settings, None when disabled.

    Raises:
        ConfigurationError: If the redis backend is selected without a URL
    """
    settings = settings or get_settings()
    if not settings.audit_enabled:
        return None

    if settings.audit_backend is AuditBackend.REDIS:
        if not settings.audit_redis_url:
            raise ConfigurationError(
                "GYMFIT_ACCESS_AUDIT_REDIS_URL is required for the redis audit backend"
            )
        store = RedisAuditStore.from_url(
            settings.audit_redis_url,
            key=settings.audit_redis_key,
            max_entries=settings.audit_max_entries,
        )
    else:
        store = InMemoryAuditStore(max_entries=settings.audit_max_entries)

    logger.info(f"Audit log enabled with {settings.audit_backend.value} backend")
    return AuditLog(store, on_error=on_error, max_pending=settings.audit_max_entries)

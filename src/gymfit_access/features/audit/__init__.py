"""Audit feature.

Append-only log of permission-relevant state transitions:
- entities/: audit entries and the store protocol
- repositories/: in-memory and Redis stores
- services/: audit log service and factory
"""

from .entities import AuditEntry, AuditStore
from .repositories import InMemoryAuditStore, RedisAuditStore
from .services import AuditLog, build_audit_log

__all__ = [
    "AuditEntry",
    "AuditStore",
    "InMemoryAuditStore",
    "RedisAuditStore",
    "AuditLog",
    "build_audit_log",
]

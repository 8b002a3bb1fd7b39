"""Audit store implementations."""

from .memory_audit_store import InMemoryAuditStore
from .redis_audit_store import RedisAuditStore

__all__ = ["InMemoryAuditStore", "RedisAuditStore"]

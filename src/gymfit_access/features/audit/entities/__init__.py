"""Audit entities package."""

from .audit_entry import AuditEntry
from .protocols import AuditStore

__all__ = ["AuditEntry", "AuditStore"]

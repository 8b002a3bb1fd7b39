"""Audit services."""

from .audit_log_service import AuditLog, build_audit_log

__all__ = ["AuditLog", "build_audit_log"]

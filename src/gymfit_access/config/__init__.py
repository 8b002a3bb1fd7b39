"""Configuration module for gymfit-access."""

from .constants import (
    ALL_BRANCHES,
    DEFAULT_ROUTE,
    Scope,
    SystemRole,
    TeamRole,
    BranchStatus,
    AuditAction,
    AuditBackend,
    AuditDefaults,
)

from .logging_config import (
    setup_logging,
    get_logger,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

from .settings import AccessSettings, get_settings

__all__ = [
    # Constants
    "ALL_BRANCHES",
    "DEFAULT_ROUTE",
    "Scope",
    "SystemRole",
    "TeamRole",
    "BranchStatus",
    "AuditAction",
    "AuditBackend",
    "AuditDefaults",

    # Logging
    "setup_logging",
    "get_logger",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",

    # Settings
    "AccessSettings",
    "get_settings",
]

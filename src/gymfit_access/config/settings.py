"""
Settings for the gymfit-access authorization core.

Values are read from environment variables prefixed with ``GYMFIT_ACCESS_``
and from an optional ``.env`` file.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AuditBackend, AuditDefaults


class AccessSettings(BaseSettings):
    """Authorization core settings."""

    model_config = SettingsConfigDict(
        env_prefix="GYMFIT_ACCESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development")

    # Audit log
    audit_enabled: bool = Field(default=True)
    audit_backend: AuditBackend = Field(default=AuditBackend.MEMORY)
    audit_redis_url: Optional[str] = Field(default=None)
    audit_redis_key: str = Field(default=AuditDefaults.REDIS_KEY)
    audit_max_entries: int = Field(default=AuditDefaults.MAX_ENTRIES, gt=0)

    # Denials of these permissions are written to the audit log
    audited_permissions: List[str] = Field(default_factory=list)
    audit_branch_denials: bool = Field(default=False)

    # Branch directory
    directory_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("audited_permissions", mode="before")
    @classmethod
    def split_permission_list(cls, value):
        """Accept a comma separated string as well as a list."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> AccessSettings:
    """Get cached settings instance."""
    return AccessSettings()

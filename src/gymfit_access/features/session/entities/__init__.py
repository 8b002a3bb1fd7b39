"""Session entities package."""

from .access_snapshot import AccessSnapshot

__all__ = ["AccessSnapshot"]

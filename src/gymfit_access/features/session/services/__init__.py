"""Session services."""

from .authorization_context import AuthorizationContext, SnapshotListener

__all__ = ["AuthorizationContext", "SnapshotListener"]

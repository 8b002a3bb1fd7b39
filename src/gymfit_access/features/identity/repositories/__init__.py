"""Identity provider implementations."""

from .memory_identity_provider import InMemoryIdentityProvider

__all__ = ["InMemoryIdentityProvider"]

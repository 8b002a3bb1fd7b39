"""Identity services."""

from .identity_binding import IdentityBinding

__all__ = ["IdentityBinding"]

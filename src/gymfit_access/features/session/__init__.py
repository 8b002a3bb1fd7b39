"""Session feature.

The authorization context owning a session's resolved identity and its
decision API.
"""

from .entities import AccessSnapshot
from .services import AuthorizationContext

__all__ = ["AccessSnapshot", "AuthorizationContext"]

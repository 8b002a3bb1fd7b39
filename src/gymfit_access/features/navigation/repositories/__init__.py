"""Navigation configuration."""

from .default_navigation import DEFAULT_NAVIGATION, ROLE_DEFAULT_ROUTES

__all__ = ["DEFAULT_NAVIGATION", "ROLE_DEFAULT_ROUTES"]
